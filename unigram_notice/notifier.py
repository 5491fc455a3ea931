# unigram_notice/notifier.py

from __future__ import annotations

import logging
import time
from typing import Protocol

import requests

LOGGER = logging.getLogger(__name__)


class Notifier(Protocol):
    """새 공지 알림을 전달하는 쪽이 구현하는 인터페이스."""

    def notify_new_notice(self, title: str, body: str) -> None:
        ...


def _post_with_rate_limit(webhook_url: str, payload: dict) -> None:
    """디스코드 웹훅에 전송하되, 429가 나오면 기다렸다가 재시도."""
    while True:
        resp = requests.post(webhook_url, json=payload, timeout=10)

        # 레이트 리밋
        if resp.status_code == 429:
            try:
                retry_after = float(resp.json().get("retry_after", 1.0))
            except ValueError:
                retry_after = 1.0
            LOGGER.warning("디스코드 레이트 리밋, %.1f초 대기", retry_after)
            time.sleep(retry_after)
            continue

        resp.raise_for_status()
        return


def _build_embed(title: str, body: str) -> dict:
    return {
        "title": title,
        "description": body,
    }


class DiscordWebhookNotifier:
    """Delivers new-notice alerts to a Discord channel webhook."""

    def __init__(self, webhook_url: str) -> None:
        self.webhook_url = webhook_url

    def notify_new_notice(self, title: str, body: str) -> None:
        payload = {
            "allowed_mentions": {"parse": []},  # 멘션 방지
            "embeds": [_build_embed(title, body)],
        }
        _post_with_rate_limit(self.webhook_url, payload)
        LOGGER.info("디스코드 전송 완료: %s", body)


class LogNotifier:
    """웹훅이 없을 때 로그로만 알림을 남김."""

    def notify_new_notice(self, title: str, body: str) -> None:
        LOGGER.info("%s %s", title, body)
