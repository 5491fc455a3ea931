# state.py
"""마지막으로 확인한 공지 제목 스냅샷과 새 공지 판별."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable, List, Sequence

from .config import DEFAULT_MAX_SNAPSHOT_TITLES as DEFAULT_MAX_TITLES
from .config import DEFAULT_STATE_PATH as STATE_PATH

LOGGER = logging.getLogger(__name__)
STATE_KEY = "last_titles"


def detect_new(current_titles: Sequence[str], previous_titles: Iterable[str]) -> List[str]:
    """이전 스냅샷에 없는 제목만 현재 순서대로 돌려줍니다."""
    previous = set(previous_titles)
    return [title for title in current_titles if title not in previous]


def load_last_titles(path: str | Path | None = None) -> List[str]:
    """state.json에서 마지막으로 본 제목 목록을 읽어옵니다."""
    state_path = Path(path) if path is not None else STATE_PATH
    try:
        raw = state_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        LOGGER.info("state.json 없음 -> 빈 스냅샷으로 시작")
        return []
    except (UnicodeDecodeError, OSError) as exc:
        LOGGER.warning("state.json 읽기 실패 -> 초기화: %s", exc)
        return []

    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        LOGGER.warning("state.json 파싱 실패 -> 초기화")
        return []

    if not isinstance(data, dict):
        LOGGER.warning("state.json 형식이 올바르지 않음 -> 초기화")
        return []

    titles = data.get(STATE_KEY, [])
    if not isinstance(titles, list):
        return []
    return [str(title) for title in titles]


def save_last_titles(
    titles: Iterable[str],
    *,
    path: str | Path | None = None,
    max_size: int = DEFAULT_MAX_TITLES,
) -> None:
    """제목 목록을 통째로 덮어씁니다. 순서는 유지하고 앞에서부터 max_size개만 남깁니다."""
    state_path = Path(path) if path is not None else STATE_PATH
    trimmed = [str(title) for title in titles][:max_size]

    data = {STATE_KEY: trimmed}
    state_path.write_text(
        json.dumps(data, ensure_ascii=False, indent=2),
        encoding="utf-8",
    )
    LOGGER.info("state.json 저장 완료, 총 %d개 제목", len(trimmed))


class JsonSnapshotStore:
    """File-backed snapshot of the titles seen by the last completed check."""

    def __init__(self, path: str | Path | None = None, max_size: int = DEFAULT_MAX_TITLES) -> None:
        self.path = Path(path) if path is not None else STATE_PATH
        self.max_size = max_size

    def load(self) -> List[str]:
        return load_last_titles(self.path)

    def save(self, titles: Iterable[str]) -> None:
        save_last_titles(titles, path=self.path, max_size=self.max_size)
