"""In-memory collection of pinned and regular notices."""

from __future__ import annotations

import logging
from typing import Iterable, List

from .models import NoticeCollection, NoticeRecord

LOGGER = logging.getLogger(__name__)


def _sort_descending(records: Iterable[NoticeRecord]) -> List[NoticeRecord]:
    return sorted(records, key=lambda r: r.sort_key, reverse=True)


def _unique_by_number(records: Iterable[NoticeRecord], known: set[str]) -> List[NoticeRecord]:
    unique: list[NoticeRecord] = []
    for record in records:
        if record.number in known:
            continue
        known.add(record.number)
        unique.append(record)
    return unique


class NoticeStore:
    """Pinned notices in page order and regular notices sorted by number.

    Regular notices are unique by ``number`` and kept in strictly descending
    numeric order after every operation.
    """

    def __init__(self) -> None:
        self._pinned: list[NoticeRecord] = []
        self._regular: list[NoticeRecord] = []

    def __len__(self) -> int:
        return len(self._pinned) + len(self._regular)

    def replace_first_page(self, pinned: Iterable[NoticeRecord], regular: Iterable[NoticeRecord]) -> None:
        self._pinned = list(pinned)
        self._regular = _sort_descending(_unique_by_number(regular, set()))
        LOGGER.debug("First page stored: %d pinned, %d regular", len(self._pinned), len(self._regular))

    def merge_next_page(self, new_regular: Iterable[NoticeRecord]) -> int:
        """Merge a further page and return how many notices were added."""
        known = {record.number for record in self._regular}
        added = _sort_descending(_unique_by_number(new_regular, known))
        if not added:
            return 0

        self._regular.extend(added)
        self._regular = _sort_descending(self._regular)
        LOGGER.debug("Merged %d notices, total regular %d", len(added), len(self._regular))
        return len(added)

    def snapshot(self) -> NoticeCollection:
        return NoticeCollection(pinned=tuple(self._pinned), regular=tuple(self._regular))

    def titles(self) -> List[str]:
        """Titles in display order, pinned first."""
        return [record.title for record in self._pinned] + [record.title for record in self._regular]
