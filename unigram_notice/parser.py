"""Parse notice board HTML into records and content nodes."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Tuple, Union
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from bs4.element import Tag

from .errors import ParseError
from .models import PINNED_NUMBER, NoticeRecord, PageRole

LOGGER = logging.getLogger(__name__)
NUMBER_PATTERN = re.compile(r"\d+", re.ASCII)


@dataclass(frozen=True)
class ListingSelectors:
    """CSS selectors describing the listing table."""

    rows: str = "table.board-table tbody tr"
    pinned_class: str = "b-top-box"
    number: str = "td.b-num-box"
    title_link: str = "td.b-td-left a"
    # 헤더 행이 다시 나타날 때의 번호 칸 텍스트
    header_labels: Tuple[str, ...] = ("번호", "공지")


@dataclass(frozen=True)
class DetailSelectors:
    """CSS selectors and labels describing a notice detail page."""

    content_box: str = "div.b-content-box"
    content: str = "div.fr-view"
    metadata_box: str = "div.b-etc-box"
    file_box: str = "div.b-file-box"
    file_size: str = "span.file-size"
    author_label: str = "작성자"
    date_label: str = "등록일"
    views_label: str = "조회수"


DEFAULT_LISTING_SELECTORS = ListingSelectors()
DEFAULT_DETAIL_SELECTORS = DetailSelectors()


def make_soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def element_text(element: Tag) -> str:
    """Return the element text with runs of whitespace collapsed."""
    return " ".join(element.get_text(" ", strip=True).split())


def resolve_url(base_url: str, href: str) -> str:
    return urljoin(base_url, href.strip())


def _select_nodes(soup: BeautifulSoup, role: PageRole, listing: ListingSelectors,
                  detail: DetailSelectors) -> List[Tag]:
    if role is PageRole.LISTING:
        rows = soup.select(listing.rows)
        if not rows:
            raise ParseError(f"no rows matched {listing.rows!r}")
        return rows

    container = soup.select_one(f"{detail.content_box} {detail.content}")
    if container is None:
        raise ParseError(f"no container matched {detail.content_box} {detail.content}")
    return [child for child in container.children if isinstance(child, Tag)]


def iter_nodes(
    page: Union[str, BeautifulSoup],
    role: PageRole,
    *,
    listing: ListingSelectors = DEFAULT_LISTING_SELECTORS,
    detail: DetailSelectors = DEFAULT_DETAIL_SELECTORS,
) -> Iterator[Tag]:
    """Yield the structural nodes of a page for the given role.

    Listing pages yield table rows, detail pages yield the direct children of
    the content container. A page whose structure cannot be selected yields
    nothing.
    """
    soup = page if isinstance(page, BeautifulSoup) else make_soup(page)
    try:
        nodes = _select_nodes(soup, role, listing, detail)
    except ParseError as exc:
        LOGGER.warning("Treating %s page as empty: %s", role.value, exc)
        return
    yield from nodes


def _classify_row(row: Tag, base_url: str, selectors: ListingSelectors) -> NoticeRecord | None:
    number_cell = row.select_one(selectors.number)
    title_link = row.select_one(selectors.title_link)
    if number_cell is None or title_link is None:
        LOGGER.debug("Skipping row without number cell or title link")
        return None

    title = element_text(title_link)
    link = resolve_url(base_url, title_link.get("href", ""))

    if selectors.pinned_class in (row.get("class") or []):
        return NoticeRecord(number=PINNED_NUMBER, title=title, link=link, is_pinned=True)

    number = element_text(number_cell)
    if number in selectors.header_labels:
        LOGGER.debug("Skipping header-like row: %s", number)
        return None
    if not NUMBER_PATTERN.fullmatch(number):
        LOGGER.debug("Skipping row with unparseable number: %r", number)
        return None

    # "045"와 "45"를 같은 공지로 취급
    return NoticeRecord(number=str(int(number)), title=title, link=link, is_pinned=False)


def iter_listing_records(
    html: str,
    base_url: str,
    selectors: ListingSelectors = DEFAULT_LISTING_SELECTORS,
) -> Iterator[NoticeRecord]:
    """Yield pinned and regular notices found on a listing page."""
    for row in iter_nodes(html, PageRole.LISTING, listing=selectors):
        record = _classify_row(row, base_url, selectors)
        if record is not None:
            yield record


def split_listing(records: Iterable[NoticeRecord]) -> Tuple[List[NoticeRecord], List[NoticeRecord]]:
    pinned: list[NoticeRecord] = []
    regular: list[NoticeRecord] = []
    for record in records:
        (pinned if record.is_pinned else regular).append(record)
    return pinned, regular
