import asyncio

import requests

from unigram_notice import crawler, main
from unigram_notice.config import Settings
from unigram_notice.notifier import DiscordWebhookNotifier, LogNotifier
from unigram_notice.state import load_last_titles


LISTING_HTML = """
<table class="board-table"><tbody>
  <tr><td class="b-num-box">12</td><td class="b-td-left"><a href="?mode=view&amp;articleNo=12">학사일정 안내</a></td></tr>
</tbody></table>
"""


class DummyResponse:
    def __init__(self, content: bytes):
        self.content = content

    def raise_for_status(self) -> None:
        return None


def test_build_controller_picks_notifier(tmp_path):
    with_hook = main.build_controller(
        Settings(state_path=tmp_path / "s.json", discord_webhook_url="https://example.com/hook")
    )
    without_hook = main.build_controller(Settings(state_path=tmp_path / "s.json"))

    assert isinstance(with_hook._notifier, DiscordWebhookNotifier)
    assert isinstance(without_hook._notifier, LogNotifier)


def test_run_once_saves_snapshot(monkeypatch, tmp_path):
    monkeypatch.setattr(
        crawler.requests, "get", lambda url, headers, timeout: DummyResponse(LISTING_HTML.encode("utf-8"))
    )
    state_path = tmp_path / "state.json"

    assert asyncio.run(main.run(Settings(state_path=state_path))) == 0
    assert load_last_titles(state_path) == ["학사일정 안내"]


def test_run_once_reports_fetch_failure(monkeypatch, tmp_path):
    def fail_get(url, headers, timeout):
        raise requests.ConnectionError("offline")

    monkeypatch.setattr(crawler.requests, "get", fail_get)
    state_path = tmp_path / "state.json"

    assert asyncio.run(main.run(Settings(state_path=state_path))) == 1
    assert not state_path.exists()
