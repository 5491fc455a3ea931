from unigram_notice import notifier


class DummyResponse:
    def __init__(self, status_code: int = 204, payload=None):
        self.status_code = status_code
        self.text = ""
        self._payload = payload or {}

    def json(self):
        return self._payload

    def raise_for_status(self) -> None:
        return None


def test_discord_notifier_builds_payload(monkeypatch):
    captured = {}

    def fake_post(url, json, timeout):
        captured["url"] = url
        captured["json"] = json
        return DummyResponse()

    monkeypatch.setattr(notifier.requests, "post", fake_post)

    webhook_url = "https://example.com/webhook"
    notifier.DiscordWebhookNotifier(webhook_url).notify_new_notice("📢 새로운 공지가 있어요!", "장학금 공지")

    assert captured["url"] == webhook_url
    assert captured["json"]["allowed_mentions"] == {"parse": []}
    embed = captured["json"]["embeds"][0]
    assert embed["title"] == "📢 새로운 공지가 있어요!"
    assert embed["description"] == "장학금 공지"


def test_discord_notifier_waits_on_rate_limit(monkeypatch):
    responses = [DummyResponse(429, {"retry_after": 0.5}), DummyResponse(204)]
    sleeps = []

    monkeypatch.setattr(notifier.requests, "post", lambda url, json, timeout: responses.pop(0))
    monkeypatch.setattr(notifier.time, "sleep", sleeps.append)

    notifier.DiscordWebhookNotifier("https://example.com/webhook").notify_new_notice("t", "b")

    assert sleeps == [0.5]
    assert responses == []


def test_log_notifier(caplog):
    with caplog.at_level("INFO", logger="unigram_notice.notifier"):
        notifier.LogNotifier().notify_new_notice("새 공지", "수강신청 안내")

    assert "수강신청 안내" in caplog.text
