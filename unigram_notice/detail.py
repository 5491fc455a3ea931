"""Assemble a notice detail page into metadata, content blocks and attachments."""

from __future__ import annotations

import logging
import re
from typing import Dict, List

from bs4 import BeautifulSoup
from bs4.element import Tag

from .models import (
    Alignment,
    Attachment,
    AttachmentKind,
    DetailContentBlock,
    ImageBlock,
    NoticeDetail,
    PageRole,
    TableBlock,
    TextBlock,
)
from .parser import DEFAULT_DETAIL_SELECTORS, DetailSelectors, element_text, iter_nodes, make_soup, resolve_url

LOGGER = logging.getLogger(__name__)
CENTER_PATTERN = re.compile(r"text-align\s*:\s*center", re.IGNORECASE)
LABEL_SEPARATORS = " :： "


def _strip_label(text: str, label: str) -> str:
    return text.split(label, 1)[1].lstrip(LABEL_SEPARATORS).strip()


def _attachment_kind(link: Tag) -> AttachmentKind:
    classes = " ".join(link.get("class") or []).lower()
    if "hwp" in classes:
        return AttachmentKind.DOCUMENT
    if "pdf" in classes:
        return AttachmentKind.PDF
    return AttachmentKind.OTHER


class DetailContentAssembler:
    """Turns one detail page into a :class:`NoticeDetail`.

    Only the direct children of the content container are visited. Wrapper
    elements that hold nested tables or images are skipped rather than
    recursed into, so nothing is emitted twice.
    """

    def __init__(self, base_url: str, selectors: DetailSelectors = DEFAULT_DETAIL_SELECTORS) -> None:
        self.base_url = base_url
        self.selectors = selectors

    def assemble(self, html: str) -> NoticeDetail:
        soup = make_soup(html)
        metadata = self.extract_metadata(soup)
        return NoticeDetail(
            author=metadata.get("author", ""),
            date=metadata.get("date", ""),
            views=metadata.get("views", ""),
            blocks=tuple(self.extract_blocks(soup)),
            attachments=tuple(self.extract_attachments(soup)),
        )

    def extract_metadata(self, soup: BeautifulSoup) -> Dict[str, str]:
        box = soup.select_one(self.selectors.metadata_box)
        if box is None:
            LOGGER.debug("Metadata box %s not found", self.selectors.metadata_box)
            return {}

        labels = {
            "author": self.selectors.author_label,
            "date": self.selectors.date_label,
            "views": self.selectors.views_label,
        }
        found: dict[str, str] = {}
        for span in box.find_all("span"):
            text = element_text(span)
            for field_name, label in labels.items():
                if field_name in found or label not in text:
                    continue
                found[field_name] = _strip_label(text, label)
                break
        return found

    def extract_blocks(self, soup: BeautifulSoup) -> List[DetailContentBlock]:
        box = soup.select_one(self.selectors.content_box)
        if box is None:
            LOGGER.warning("Content box %s not found", self.selectors.content_box)
            return []

        if box.select_one(self.selectors.content) is None:
            # 본문 컨테이너가 없으면 전체 텍스트를 한 덩어리로
            LOGGER.info("%s not found, using flattened content box text", self.selectors.content)
            text = element_text(box)
            return [TextBlock(text)] if text else []

        blocks: list[DetailContentBlock] = []
        for element in iter_nodes(soup, PageRole.DETAIL, detail=self.selectors):
            blocks.extend(self._blocks_for(element))
        return blocks

    def _blocks_for(self, element: Tag) -> List[DetailContentBlock]:
        if element.name == "p":
            return self._paragraph_blocks(element)
        if element.name == "table":
            table = self._table_block(element)
            return [table] if table is not None else []

        if element.find("table") is not None or element.find("img") is not None:
            LOGGER.debug("Skipping <%s> wrapper with nested tables or images", element.name)
            return []
        text = element_text(element)
        return [TextBlock(text)] if text else []

    def _paragraph_blocks(self, paragraph: Tag) -> List[DetailContentBlock]:
        blocks: list[DetailContentBlock] = []
        text = element_text(paragraph)
        if text:
            centered = CENTER_PATTERN.search(paragraph.get("style", "")) is not None
            blocks.append(TextBlock(text, Alignment.CENTER if centered else Alignment.LEADING))

        for image in paragraph.find_all("img"):
            src = (image.get("src") or "").strip()
            if src:
                blocks.append(ImageBlock(resolve_url(self.base_url, src)))
        return blocks

    def _table_block(self, table: Tag) -> TableBlock | None:
        rows = table.find_all("tr")
        header_cells = table.find_all("th")
        header_from_first_row = False
        if header_cells:
            headers = [element_text(cell) for cell in header_cells]
        elif rows:
            headers = [element_text(cell) for cell in rows[0].find_all("td")]
            header_from_first_row = bool(headers)
        else:
            headers = []

        body: list[tuple[str, ...]] = []
        for index, row in enumerate(rows):
            if index == 0 and header_from_first_row:
                continue
            cells = tuple(element_text(cell) for cell in row.find_all("td"))
            if cells:
                body.append(cells)

        if not body:
            return None
        return TableBlock(headers=tuple(headers), rows=tuple(body))

    def extract_attachments(self, soup: BeautifulSoup) -> List[Attachment]:
        box = soup.select_one(self.selectors.file_box)
        if box is None:
            return []

        attachments: list[Attachment] = []
        for link in box.find_all("a"):
            name = element_text(link)
            size_tag = link.select_one(self.selectors.file_size)
            size = element_text(size_tag) if size_tag is not None else ""
            if size:
                name = name.replace(size, "").strip()
            attachments.append(
                Attachment(
                    name=name,
                    url=resolve_url(self.base_url, link.get("href", "")),
                    size=size,
                    kind=_attachment_kind(link),
                )
            )
        return attachments
