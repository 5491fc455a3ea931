"""Offset cursor for the paginated notice listing."""

from __future__ import annotations

from .models import PaginationState

DEFAULT_PAGE_SIZE = 10


class PaginationCursor:
    """Tracks the listing offset and whether more pages may exist."""

    def __init__(self, page_size: int = DEFAULT_PAGE_SIZE, initial_offset: int = 0) -> None:
        if page_size <= 0:
            raise ValueError("page_size must be positive")
        if initial_offset < 0:
            raise ValueError("initial_offset must not be negative")
        self._initial_offset = initial_offset
        self._state = PaginationState(offset=initial_offset, page_size=page_size)

    @property
    def state(self) -> PaginationState:
        return self._state

    @property
    def exhausted(self) -> bool:
        return self._state.exhausted

    def current(self) -> int:
        return self._state.offset

    def advance(self) -> None:
        """Move to the next page; does nothing once exhausted."""
        if self._state.exhausted:
            return
        self._state = PaginationState(
            offset=self._state.offset + self._state.page_size,
            page_size=self._state.page_size,
        )

    def start_after_first_page(self) -> None:
        self._state = PaginationState(
            offset=self._initial_offset + self._state.page_size,
            page_size=self._state.page_size,
        )

    def mark_exhausted(self) -> None:
        self._state = PaginationState(
            offset=self._state.offset,
            page_size=self._state.page_size,
            exhausted=True,
        )

    def reset(self) -> None:
        self._state = PaginationState(offset=self._initial_offset, page_size=self._state.page_size)
