import pytest
import requests

from app.infrastructure.notification_service import normalize_phone
from app.interfaces.ISettingsProvider import NEXTSMS_TOKEN_KEY, OWNER_PHONE_KEY
from tests.conftest import FakeResponse


@pytest.mark.parametrize("raw, expected", [
    ("9876543210", "919876543210"),
    ("+91 98765 43210", "919876543210"),
    ("09876543210", "919876543210"),
    ("919876543210", "919876543210"),
    ("(987) 654-3210", "919876543210"),
])
def test_normalize_phone(raw, expected):
    assert normalize_phone(raw) == expected


def test_send_without_token_skips_network(notifier, http):
    result = notifier.send("9876543210", "hello")

    assert result.success is False
    assert "not configured" in result.error
    assert http.calls == []


def test_send_builds_nextsms_request(notifier, http, settings_provider):
    settings_provider.set(NEXTSMS_TOKEN_KEY, "abc123")

    result = notifier.send("9876543210", "Your order is confirmed")

    assert result.success is True
    assert result.data == {"status": "success"}
    assert http.calls == [{
        "url": "https://nextsms.test/send",
        "params": {"receiver": "919876543210", "msgtext": "Your order is confirmed", "token": "abc123"},
        "timeout": 5,
    }]


def test_send_passes_media_url(notifier, http, settings_provider):
    settings_provider.set(NEXTSMS_TOKEN_KEY, "abc123")

    notifier.send("9876543210", "Brochure", media_url="https://example.com/brochure.pdf")

    assert http.calls[0]["params"]["mediaUrl"] == "https://example.com/brochure.pdf"


def test_token_change_applies_to_next_send(notifier, http, settings_provider):
    settings_provider.set(NEXTSMS_TOKEN_KEY, "old")
    notifier.send("9876543210", "one")
    settings_provider.set(NEXTSMS_TOKEN_KEY, "new")
    notifier.send("9876543210", "two")

    assert [c["params"]["token"] for c in http.calls] == ["old", "new"]


def test_remote_error_is_reported(notifier, http, settings_provider):
    settings_provider.set(NEXTSMS_TOKEN_KEY, "abc123")
    http.response = FakeResponse(401, {"message": "Invalid token"})

    result = notifier.send("9876543210", "hello")

    assert result.success is False
    assert result.error == "Invalid token"


def test_remote_error_without_json_body(notifier, http, settings_provider):
    settings_provider.set(NEXTSMS_TOKEN_KEY, "abc123")
    http.response = FakeResponse(502, None)

    result = notifier.send("9876543210", "hello")

    assert result.success is False
    assert result.error == "Failed to send message"


def test_transport_error_is_reported_not_raised(notifier, http, settings_provider):
    settings_provider.set(NEXTSMS_TOKEN_KEY, "abc123")
    http.error = requests.ConnectionError("connection refused")

    result = notifier.send("9876543210", "hello")

    assert result.success is False
    assert "connection refused" in result.error
    assert len(http.calls) == 1


def test_notify_owner_without_owner_phone(notifier, http, settings_provider):
    settings_provider.set(NEXTSMS_TOKEN_KEY, "abc123")

    assert notifier.notify_owner("New order") is None
    assert http.calls == []


def test_notify_owner_sends_to_configured_phone(notifier, http, settings_provider):
    settings_provider.set(NEXTSMS_TOKEN_KEY, "abc123")
    settings_provider.set(OWNER_PHONE_KEY, "09000000099")

    result = notifier.notify_owner("New order")

    assert result.success is True
    assert http.receivers() == ["919000000099"]
