"""Fetch listing and detail pages from the Hallym notice board."""

from __future__ import annotations

import logging
from urllib.parse import urlencode, urlparse

import requests

from .config import DEFAULT_BOARD_PATH, DEFAULT_NOTICE_ORIGIN, DEFAULT_PAGE_SIZE, Settings
from .detail import DetailContentAssembler
from .errors import DecodeError, InvalidArticleId, InvalidUrl, NetworkError
from .models import NoticeDetail

LOGGER = logging.getLogger(__name__)
ARTICLE_MARKER = "articleNo="
DEFAULT_ENCODING = "utf-8"


def _validate_url(url: str) -> str:
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise InvalidUrl(f"Malformed URL: {url}")
    return url


def board_url(origin: str = DEFAULT_NOTICE_ORIGIN, board_path: str = DEFAULT_BOARD_PATH) -> str:
    return _validate_url(origin.rstrip("/") + "/" + board_path.lstrip("/"))


def build_listing_url(
    offset: int,
    *,
    origin: str = DEFAULT_NOTICE_ORIGIN,
    board_path: str = DEFAULT_BOARD_PATH,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> str:
    if offset < 0:
        raise InvalidUrl(f"Negative listing offset: {offset}")
    query = urlencode({"mode": "list", "articleLimit": page_size, "article.offset": offset})
    return f"{board_url(origin, board_path)}?{query}"


def extract_article_no(link: str) -> str:
    """Return the ``articleNo`` value of a detail link.

    Reads from the marker up to the next ``&`` or the end of the link.
    """
    start = link.find(ARTICLE_MARKER)
    if start < 0:
        raise InvalidArticleId(f"No {ARTICLE_MARKER} in link: {link}")

    article_no = link[start + len(ARTICLE_MARKER):].split("&", 1)[0]
    if not article_no:
        raise InvalidArticleId(f"Empty {ARTICLE_MARKER} in link: {link}")
    return article_no


def build_detail_url(
    article_no: str,
    *,
    origin: str = DEFAULT_NOTICE_ORIGIN,
    board_path: str = DEFAULT_BOARD_PATH,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> str:
    query = urlencode(
        {"mode": "view", "articleNo": article_no, "article.offset": 0, "articleLimit": page_size}
    )
    return f"{board_url(origin, board_path)}?{query}"


def fetch_html(url: str, timeout: float = 10, encoding: str = DEFAULT_ENCODING) -> str:
    """Retrieve the HTML contents of the given URL."""
    headers = {
        "User-Agent": (
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
            "AppleWebKit/537.36 (KHTML, like Gecko) "
            "Chrome/118.0.0.0 Safari/537.36"
        )
    }
    _validate_url(url)
    try:
        response = requests.get(url, headers=headers, timeout=timeout)
        response.raise_for_status()
    except (requests.exceptions.InvalidURL, requests.exceptions.MissingSchema) as exc:
        raise InvalidUrl(str(exc)) from exc
    except requests.RequestException as exc:
        raise NetworkError(f"GET {url} failed: {exc}") from exc

    try:
        return response.content.decode(encoding)
    except (UnicodeDecodeError, LookupError) as exc:
        raise DecodeError(f"Body of {url} is not valid {encoding}") from exc


class BoardClient:
    """Network boundary for one notice board."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.base_url = board_url(settings.notice_origin, settings.board_path)
        self.assembler = DetailContentAssembler(self.base_url)

    def listing_url(self, offset: int) -> str:
        return build_listing_url(
            offset,
            origin=self.settings.notice_origin,
            board_path=self.settings.board_path,
            page_size=self.settings.page_size,
        )

    def fetch_listing(self, offset: int) -> str:
        url = self.listing_url(offset)
        LOGGER.info("Fetching listing page at offset %d", offset)
        return fetch_html(url, timeout=self.settings.request_timeout)

    def detail_url(self, link: str) -> str:
        return build_detail_url(
            extract_article_no(link),
            origin=self.settings.notice_origin,
            board_path=self.settings.board_path,
            page_size=self.settings.page_size,
        )

    def fetch_detail(self, link: str) -> NoticeDetail:
        """Fetch and assemble the detail page a listing link points to."""
        url = self.detail_url(link)
        LOGGER.info("Fetching notice detail %s", url)
        return self.assembler.assemble(fetch_html(url, timeout=self.settings.request_timeout))
