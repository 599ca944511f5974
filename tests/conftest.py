"""Test configuration and fixtures."""

import pytest

from tests.payloads import TEST_CHANNEL_ID, TEST_STORE_API_KEY


@pytest.fixture(autouse=True)
def bridge_settings_env(monkeypatch):
    """Point Settings at test values.

    Settings are resolved lazily by the container, so variables set here are
    what every test container sees.
    """
    monkeypatch.setenv("ENVIRONMENT", "test")
    monkeypatch.setenv("TELEGRAM__BOT_TOKEN", "123456:test-token")
    monkeypatch.setenv("TELEGRAM__CHANNEL_ID", TEST_CHANNEL_ID)
    monkeypatch.setenv("WEBENGAGE__LICENSE_CODE", "~test")
    monkeypatch.setenv("WEBENGAGE__API_KEY", "test-webengage-key")
    monkeypatch.setenv("AUTH__STORE_API_KEY", TEST_STORE_API_KEY)
    monkeypatch.delenv("TELEGRAM__WEBHOOK_SECRET", raising=False)
    monkeypatch.delenv("WEBENGAGE__AWAIT_DELIVERY", raising=False)
