from unigram_notice.models import PINNED_NUMBER, NoticeRecord
from unigram_notice.store import NoticeStore


def _regular(*numbers):
    return [
        NoticeRecord(number=str(n), title=f"공지 {n}", link=f"https://example.com/?articleNo={n}")
        for n in numbers
    ]


def _numbers(store):
    return [r.number for r in store.snapshot().regular]


def _pinned(title):
    return NoticeRecord(number=PINNED_NUMBER, title=title, link="https://example.com/p", is_pinned=True)


def test_replace_first_page_sorts_descending():
    store = NoticeStore()
    store.replace_first_page([_pinned("고정")], _regular(43, 45, 44))

    snapshot = store.snapshot()
    assert [r.title for r in snapshot.pinned] == ["고정"]
    assert _numbers(store) == ["45", "44", "43"]
    assert len(store) == 4


def test_replace_first_page_is_wholesale():
    store = NoticeStore()
    store.replace_first_page([_pinned("a"), _pinned("b")], _regular(10, 9))
    store.replace_first_page([_pinned("c")], _regular(20))

    assert [r.title for r in store.snapshot().pinned] == ["c"]
    assert _numbers(store) == ["20"]


def test_merge_next_page_skips_known_numbers():
    store = NoticeStore()
    store.replace_first_page([], _regular(45, 44, 43))

    added = store.merge_next_page(_regular(44, 42))

    assert added == 1
    assert _numbers(store) == ["45", "44", "43", "42"]


def test_merge_next_page_is_idempotent():
    store = NoticeStore()
    store.replace_first_page([], _regular(30, 29))
    page = _regular(28, 27, 31)

    assert store.merge_next_page(page) == 3
    once = store.snapshot()
    assert store.merge_next_page(page) == 0

    assert store.snapshot() == once


def test_merge_dedupes_within_a_page_and_keeps_order():
    store = NoticeStore()
    store.replace_first_page([], _regular(5))

    added = store.merge_next_page(_regular(100, 3, 100, 7))

    assert added == 3
    numbers = [int(n) for n in _numbers(store)]
    assert numbers == sorted(set(numbers), reverse=True)
    assert numbers == [100, 7, 5, 3]


def test_numeric_not_lexicographic_order():
    store = NoticeStore()
    store.replace_first_page([], _regular(9, 100, 10))

    assert _numbers(store) == ["100", "10", "9"]


def test_titles_lists_pinned_first():
    store = NoticeStore()
    store.replace_first_page([_pinned("고정")], _regular(1, 2))

    assert store.titles() == ["고정", "공지 2", "공지 1"]
