"""Configuration handling for the notice checker."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DEFAULT_NOTICE_ORIGIN = "https://data.hallym.ac.kr"
DEFAULT_BOARD_PATH = "/data/community/notice02.do"
DEFAULT_PAGE_SIZE = 10
DEFAULT_REQUEST_TIMEOUT = 10
DEFAULT_STATE_PATH = Path(__file__).resolve().parent.parent / "state.json"
DEFAULT_MAX_SNAPSHOT_TITLES = 200
DEFAULT_CHECK_INTERVAL_SECONDS = 0


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    notice_origin: str = DEFAULT_NOTICE_ORIGIN
    board_path: str = DEFAULT_BOARD_PATH
    page_size: int = DEFAULT_PAGE_SIZE
    request_timeout: int = DEFAULT_REQUEST_TIMEOUT
    state_path: Path = DEFAULT_STATE_PATH
    max_snapshot_titles: int = DEFAULT_MAX_SNAPSHOT_TITLES
    check_interval_seconds: int = DEFAULT_CHECK_INTERVAL_SECONDS
    discord_webhook_url: Optional[str] = None


def _int_env(name: str, default: int, *, minimum: int = 0) -> int:
    raw = os.getenv(name, str(default))
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer") from exc
    if value < minimum:
        raise ValueError(f"{name} must be at least {minimum}")
    return value


def get_settings() -> Settings:
    """Load settings from the environment (and a local .env file, if any)."""
    load_dotenv()

    webhook = (os.getenv("DISCORD_WEBHOOK_URL") or "").strip() or None
    state_path = os.getenv("STATE_PATH")

    return Settings(
        notice_origin=os.getenv("NOTICE_ORIGIN", DEFAULT_NOTICE_ORIGIN).strip(),
        board_path=os.getenv("NOTICE_BOARD_PATH", DEFAULT_BOARD_PATH).strip(),
        page_size=_int_env("PAGE_SIZE", DEFAULT_PAGE_SIZE, minimum=1),
        request_timeout=_int_env("REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT, minimum=1),
        state_path=Path(state_path.strip()) if state_path else DEFAULT_STATE_PATH,
        max_snapshot_titles=_int_env("MAX_SNAPSHOT_TITLES", DEFAULT_MAX_SNAPSHOT_TITLES, minimum=1),
        check_interval_seconds=_int_env("CHECK_INTERVAL_SECONDS", DEFAULT_CHECK_INTERVAL_SECONDS),
        discord_webhook_url=webhook,
    )
