import time

import pytest

from llm_catalog import config
from llm_catalog.config import PROVIDER_CATALOGUE, REQUEST_TIMEOUT, Settings
from llm_catalog.fetcher import fetch_json
from llm_catalog.errors import FetchTimeoutError


class TestSettings:
    def test_defaults(self, monkeypatch):
        for var in ("CATALOG_REQUEST_TIMEOUT", "LOG_LEVEL", "CATALOG_PORT", "DEBUG"):
            monkeypatch.delenv(var, raising=False)

        settings = Settings()

        assert settings.request_timeout == REQUEST_TIMEOUT == 5.0
        assert settings.log_level == "INFO"
        assert settings.port == 7545
        assert settings.debug is False

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("CATALOG_REQUEST_TIMEOUT", "2.5")
        monkeypatch.setenv("DEBUG", "yes")

        settings = Settings()

        assert settings.request_timeout == 2.5
        assert settings.debug is True

    def test_reload_picks_up_new_environment(self, monkeypatch):
        settings = Settings()
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        settings.reload()
        assert settings.log_level == "DEBUG"


def test_catalogue_auth_styles():
    assert PROVIDER_CATALOGUE["google"]["auth"] == "google"
    assert PROVIDER_CATALOGUE["anthropic"]["auth"] == "anthropic"
    for p in ("openai", "openrouter", "mistral", "generic"):
        assert PROVIDER_CATALOGUE[p]["auth"] == "bearer"


@pytest.mark.asyncio
async def test_fetcher_uses_configured_timeout(monkeypatch, serve):
    monkeypatch.setattr(config.settings, "request_timeout", 0.1)
    handler = serve({"data": []}, delay=5.0)

    started = time.monotonic()
    with pytest.raises(FetchTimeoutError):
        await fetch_json("https://api.example.com/v1/models", {}, transport=handler.transport)
    assert time.monotonic() - started < 1.0
