import json

from unigram_notice.state import JsonSnapshotStore, detect_new, load_last_titles, save_last_titles


def test_detect_new_keeps_current_order():
    current = ["다", "가", "라", "나"]
    previous = ["가", "나"]

    assert detect_new(current, previous) == ["다", "라"]


def test_detect_new_with_empty_previous_returns_current():
    current = ["a", "b", "c"]

    assert detect_new(current, []) == current


def test_detect_new_with_same_titles_is_empty():
    titles = ["a", "b"]

    assert detect_new(titles, list(titles)) == []


def test_save_and_load_last_titles(tmp_path):
    path = tmp_path / "state.json"

    save_last_titles(["셋", "하나", "둘"], path=path, max_size=2)

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["last_titles"] == ["셋", "하나"]
    assert load_last_titles(path) == ["셋", "하나"]


def test_load_last_titles_missing_or_broken(tmp_path):
    path = tmp_path / "state.json"
    assert load_last_titles(path) == []

    path.write_text("{not json", encoding="utf-8")
    assert load_last_titles(path) == []

    path.write_text(json.dumps(["a"]), encoding="utf-8")
    assert load_last_titles(path) == []


def test_json_snapshot_store_overwrites(tmp_path):
    store = JsonSnapshotStore(tmp_path / "state.json", max_size=10)

    store.save(["a", "b"])
    store.save(["c"])

    assert store.load() == ["c"]


def test_load_last_titles_unreadable_file(tmp_path):
    path = tmp_path / "state.json"
    path.write_bytes(b"\xff\xfe\x00garbage")
    assert load_last_titles(path) == []

    directory = tmp_path / "state_dir"
    directory.mkdir()
    assert load_last_titles(directory) == []
