"""Data models for the Hallym notice board scraper."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple, Union

PINNED_NUMBER = "pinned"


def _new_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class NoticeRecord:
    """A single row of the notice listing.

    ``id`` is assigned when the row is parsed and is not part of equality:
    two parses of the same row compare equal.
    """

    number: str
    title: str
    link: str
    is_pinned: bool = False
    id: str = field(default_factory=_new_id, compare=False)

    @property
    def sort_key(self) -> int:
        if self.is_pinned:
            raise ValueError("pinned notices have no numeric order")
        return int(self.number)


@dataclass(frozen=True)
class PaginationState:
    offset: int
    page_size: int
    exhausted: bool = False


@dataclass(frozen=True)
class NoticeCollection:
    """Read-only view of the notices currently held by a board session."""

    pinned: Tuple[NoticeRecord, ...] = ()
    regular: Tuple[NoticeRecord, ...] = ()


class PageRole(str, Enum):
    LISTING = "listing"
    DETAIL = "detail"


class FetchState(str, Enum):
    IDLE = "idle"
    FETCHING_FIRST_PAGE = "fetching_first_page"
    FETCHING_NEXT_PAGE = "fetching_next_page"
    EXHAUSTED = "exhausted"
    FAILED = "failed"


class Alignment(str, Enum):
    LEADING = "leading"
    CENTER = "center"


class AttachmentKind(str, Enum):
    DOCUMENT = "document"
    PDF = "pdf"
    OTHER = "other"


@dataclass(frozen=True)
class TextBlock:
    content: str
    alignment: Alignment = Alignment.LEADING


@dataclass(frozen=True)
class ImageBlock:
    url: str


@dataclass(frozen=True)
class TableBlock:
    headers: Tuple[str, ...]
    rows: Tuple[Tuple[str, ...], ...]


DetailContentBlock = Union[TextBlock, ImageBlock, TableBlock]


@dataclass(frozen=True)
class Attachment:
    name: str
    url: str
    size: str = ""
    kind: AttachmentKind = AttachmentKind.OTHER


@dataclass(frozen=True)
class NoticeDetail:
    """Parsed content of one notice's detail page."""

    author: str = ""
    date: str = ""
    views: str = ""
    blocks: Tuple[DetailContentBlock, ...] = ()
    attachments: Tuple[Attachment, ...] = ()
