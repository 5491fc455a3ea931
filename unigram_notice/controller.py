"""Drive listing fetches, pagination and new-notice detection for one board."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Iterable, List, Optional, Protocol

import requests

from .errors import DecodeError, InvalidUrl, NetworkError
from .models import FetchState, NoticeCollection, PaginationState
from .notifier import Notifier
from .pagination import DEFAULT_PAGE_SIZE, PaginationCursor
from .parser import iter_listing_records, split_listing
from .state import detect_new
from .store import NoticeStore

LOGGER = logging.getLogger(__name__)
NOTIFICATION_TITLE = "📢 새로운 공지가 있어요!"
FETCH_ERRORS = (NetworkError, DecodeError, InvalidUrl)

ListingFetcher = Callable[[int], str]


class SnapshotStore(Protocol):
    def load(self) -> List[str]:
        ...

    def save(self, titles: Iterable[str]) -> None:
        ...


class NoticeFetchController:
    """Owns the pagination cursor and notice store of a board session.

    ``fetch_listing`` is a blocking callable returning the listing HTML for an
    offset. It runs in a worker thread; every state change happens on the
    event loop once the fetch has returned. At most one fetch is in flight:
    requests that arrive while fetching are ignored.
    """

    def __init__(
        self,
        fetch_listing: ListingFetcher,
        base_url: str,
        *,
        notifier: Optional[Notifier] = None,
        snapshot_store: Optional[SnapshotStore] = None,
        page_size: int = DEFAULT_PAGE_SIZE,
        notification_title: str = NOTIFICATION_TITLE,
    ) -> None:
        self._fetch_listing = fetch_listing
        self._base_url = base_url
        self._notifier = notifier
        self._snapshot_store = snapshot_store
        self._notification_title = notification_title
        self._cursor = PaginationCursor(page_size)
        self._store = NoticeStore()
        self._state = FetchState.IDLE
        self.last_error: Optional[Exception] = None
        self.last_new_titles: List[str] = []

    @property
    def state(self) -> FetchState:
        return self._state

    @property
    def is_fetching(self) -> bool:
        return self._state in (FetchState.FETCHING_FIRST_PAGE, FetchState.FETCHING_NEXT_PAGE)

    @property
    def collection(self) -> NoticeCollection:
        return self._store.snapshot()

    @property
    def pagination(self) -> PaginationState:
        return self._cursor.state

    def acknowledge_failure(self) -> None:
        if self._state is FetchState.FAILED:
            self._state = FetchState.EXHAUSTED if self._cursor.exhausted else FetchState.IDLE

    async def _fetch(self, offset: int) -> str:
        return await asyncio.to_thread(self._fetch_listing, offset)

    def _fail(self, exc: Exception) -> None:
        self.last_error = exc
        self._state = FetchState.FAILED

    async def refresh(self) -> bool:
        """Reload the first page and check it for new notices.

        Returns ``True`` when the first page was fetched and applied.
        """
        if self.is_fetching:
            LOGGER.debug("Ignoring refresh: fetch already in progress")
            return False

        self.acknowledge_failure()
        self._state = FetchState.FETCHING_FIRST_PAGE
        try:
            previous_titles = await self._load_snapshot()
            html = await self._fetch(0)
        except FETCH_ERRORS as exc:
            LOGGER.warning("First page fetch failed: %s", exc)
            self._fail(exc)
            return False
        except Exception as exc:
            self._fail(exc)
            raise

        pinned, regular = split_listing(iter_listing_records(html, self._base_url))
        self._cursor.reset()
        self._store.replace_first_page(pinned, regular)
        self._cursor.start_after_first_page()
        if not regular:
            self._cursor.mark_exhausted()
        self.last_error = None
        LOGGER.info("First page loaded: %d pinned, %d regular", len(pinned), len(regular))

        # 스냅샷 저장이 끝날 때까지 다른 요청은 받지 않음
        try:
            await self._check_for_new_notices(previous_titles)
        finally:
            self._state = FetchState.EXHAUSTED if self._cursor.exhausted else FetchState.IDLE
        return True

    async def load_more(self) -> bool:
        """Fetch the page at the current offset and merge it.

        Returns ``True`` when at least one new notice was added.
        """
        if self.is_fetching:
            LOGGER.debug("Ignoring load_more: fetch already in progress")
            return False
        if self._cursor.exhausted:
            LOGGER.debug("Ignoring load_more: no more pages")
            return False

        self.acknowledge_failure()
        offset = self._cursor.current()
        self._state = FetchState.FETCHING_NEXT_PAGE
        try:
            html = await self._fetch(offset)
        except FETCH_ERRORS as exc:
            LOGGER.warning("Page fetch at offset %d failed: %s", offset, exc)
            self._fail(exc)
            return False
        except Exception as exc:
            self._fail(exc)
            raise

        _, regular = split_listing(iter_listing_records(html, self._base_url))
        added = self._store.merge_next_page(regular)
        self.last_error = None
        if added == 0:
            self._cursor.mark_exhausted()
            self._state = FetchState.EXHAUSTED
            LOGGER.info("No more notices to load at offset %d", offset)
            return False

        self._cursor.advance()
        self._state = FetchState.IDLE
        LOGGER.info("Loaded %d new notices, total %d", added, len(self._store))
        return True

    async def _load_snapshot(self) -> List[str]:
        if self._snapshot_store is None:
            return []
        return await asyncio.to_thread(self._snapshot_store.load)

    async def _check_for_new_notices(self, previous_titles: List[str]) -> None:
        current_titles = self._store.titles()
        self.last_new_titles = detect_new(current_titles, previous_titles)

        if self._snapshot_store is not None:
            await asyncio.to_thread(self._snapshot_store.save, current_titles)

        if not self.last_new_titles:
            LOGGER.info("새 공지 0개")
            return

        LOGGER.info("새 공지 %d개", len(self.last_new_titles))
        if self._notifier is None:
            return
        try:
            await asyncio.to_thread(
                self._notifier.notify_new_notice, self._notification_title, self.last_new_titles[0]
            )
        except requests.RequestException as exc:
            LOGGER.error("Failed to send new notice notification: %s", exc)

    async def run_periodic(self, interval: float, stop_event: Optional[asyncio.Event] = None) -> None:
        """Call :meth:`refresh` every ``interval`` seconds until ``stop_event`` is set."""
        stop_event = stop_event or asyncio.Event()
        while not stop_event.is_set():
            try:
                await self.refresh()
            except Exception:  # noqa: BLE001
                LOGGER.exception("Periodic notice check failed")
            try:
                await asyncio.wait_for(stop_event.wait(), timeout=interval)
            except asyncio.TimeoutError:
                continue
