from __future__ import annotations

from datetime import timedelta

import pytest

from pysiri.config import SiriConfig
from pysiri.exceptions import SiriConfigError


def test_defaults() -> None:
    config = SiriConfig(url="https://example.org/et.json")
    assert config.feed_id is None
    assert config.request_timeout == 30.0
    assert config.initial_lookback == timedelta(days=30)


@pytest.mark.parametrize("url", ["", "   "])
def test_blank_url_is_fatal(url: str) -> None:
    with pytest.raises(SiriConfigError, match="url"):
        SiriConfig(url=url)


def test_non_positive_timeout_is_fatal() -> None:
    with pytest.raises(SiriConfigError):
        SiriConfig(url="https://example.org/et.json", request_timeout=0)


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SIRI_URL", "https://example.org/et.json")
    monkeypatch.setenv("SIRI_FEED_ID", "STIF")
    monkeypatch.setenv("SIRI_REQUEST_TIMEOUT", "12.5")
    monkeypatch.setenv("SIRI_INITIAL_LOOKBACK_DAYS", "1")

    config = SiriConfig.from_env()

    assert config.url == "https://example.org/et.json"
    assert config.feed_id == "STIF"
    assert config.request_timeout == 12.5
    assert config.initial_lookback == timedelta(days=1)


def test_from_env_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SIRI_URL", "https://example.org/et.json")
    monkeypatch.setenv("SIRI_REQUEST_TIMEOUT", "not-a-number")

    config = SiriConfig.from_env(url="https://other.example.org/et.json", request_timeout=5.0)

    assert config.url == "https://other.example.org/et.json"
    assert config.request_timeout == 5.0


def test_from_env_without_url_is_fatal(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SIRI_URL", raising=False)
    with pytest.raises(SiriConfigError):
        SiriConfig.from_env()


def test_from_env_rejects_non_numeric_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SIRI_URL", "https://example.org/et.json")
    monkeypatch.setenv("SIRI_REQUEST_TIMEOUT", "soon")
    with pytest.raises(SiriConfigError, match="SIRI_REQUEST_TIMEOUT"):
        SiriConfig.from_env()


def test_from_mapping() -> None:
    config = SiriConfig.from_mapping(
        {"type": "siri-lite-et", "url": "https://example.org/et.json", "feedId": "STIF", "timeout": 10}
    )
    assert config.url == "https://example.org/et.json"
    assert config.feed_id == "STIF"
    assert config.request_timeout == 10.0


def test_from_mapping_feed_id_is_optional() -> None:
    assert SiriConfig.from_mapping({"url": "https://example.org/et.json"}).feed_id is None


@pytest.mark.parametrize("node", [{}, {"url": None}, {"url": 42}, {"url": ""}])
def test_from_mapping_requires_url(node: dict[str, object]) -> None:
    with pytest.raises(SiriConfigError):
        SiriConfig.from_mapping(node)
