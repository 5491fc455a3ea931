"""Entrypoint for the Hallym notice checker."""

from __future__ import annotations

import asyncio
import logging
import sys

from .config import Settings, get_settings
from .controller import NoticeFetchController
from .crawler import BoardClient
from .errors import InvalidUrl
from .notifier import DiscordWebhookNotifier, LogNotifier, Notifier
from .state import JsonSnapshotStore

LOGGER = logging.getLogger(__name__)


def build_controller(settings: Settings) -> NoticeFetchController:
    """Wire the board client, notifier and snapshot file into a controller."""
    client = BoardClient(settings)
    notifier: Notifier
    if settings.discord_webhook_url:
        notifier = DiscordWebhookNotifier(settings.discord_webhook_url)
    else:
        LOGGER.info("DISCORD_WEBHOOK_URL not set, notifications go to the log")
        notifier = LogNotifier()

    return NoticeFetchController(
        client.fetch_listing,
        client.base_url,
        notifier=notifier,
        snapshot_store=JsonSnapshotStore(settings.state_path, settings.max_snapshot_titles),
        page_size=settings.page_size,
    )


async def run(settings: Settings) -> int:
    controller = build_controller(settings)

    if settings.check_interval_seconds > 0:
        LOGGER.info("Checking every %d seconds", settings.check_interval_seconds)
        await controller.run_periodic(settings.check_interval_seconds)
        return 0

    if not await controller.refresh():
        LOGGER.error("Failed to fetch notices: %s", controller.last_error)
        return 1

    collection = controller.collection
    LOGGER.info(
        "공지 %d개 (고정 %d개), 새 공지 %d개",
        len(collection.pinned) + len(collection.regular),
        len(collection.pinned),
        len(controller.last_new_titles),
    )
    return 0


def main() -> int:
    """Run the checker workflow."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
    )

    try:
        settings = get_settings()
    except ValueError as exc:
        LOGGER.error("Configuration error: %s", exc)
        return 1

    try:
        return asyncio.run(run(settings))
    except InvalidUrl as exc:
        LOGGER.error("Configuration error: %s", exc)
        return 1
    except KeyboardInterrupt:
        LOGGER.info("Stopped")
        return 0


if __name__ == "__main__":
    sys.exit(main())
