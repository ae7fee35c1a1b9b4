"""Source configuration for pysiri."""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Mapping
from datetime import timedelta
from typing import Any

from pysiri._constants import DEFAULT_INITIAL_LOOKBACK, DEFAULT_REQUEST_TIMEOUT
from pysiri.exceptions import SiriConfigError


def _as_float(key: str, value: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise SiriConfigError(f"{key} must be numeric, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class SiriConfig:
    """Estimated-timetable source configuration.

    Parameters
    ----------
    url : str
        SIRI Lite estimated-timetable endpoint. Mandatory; a missing or
        blank value raises :class:`~pysiri.exceptions.SiriConfigError`.
    feed_id : str or None
        Opaque feed identifier. Not validated; handed to downstream
        consumers so they can namespace trip ids.
    request_timeout : float
        Total HTTP timeout in seconds for one fetch.
    initial_lookback : timedelta
        Age of the synthetic "last accepted" timestamp a new source starts
        with. Snapshots older than ``now - initial_lookback`` are rejected
        as stale on the first poll.
    """

    url: str
    feed_id: str | None = None
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    initial_lookback: timedelta = DEFAULT_INITIAL_LOOKBACK

    def __post_init__(self) -> None:
        if not isinstance(self.url, str) or not self.url.strip():
            raise SiriConfigError("Missing mandatory 'url' parameter")
        if self.request_timeout <= 0:
            raise SiriConfigError(f"request_timeout must be positive, got {self.request_timeout}")
        if self.initial_lookback < timedelta(0):
            raise SiriConfigError("initial_lookback must not be negative")

    @classmethod
    def from_env(cls, **overrides: Any) -> SiriConfig:
        """Create configuration from environment variables.

        Reads ``SIRI_URL`` and the optional ``SIRI_FEED_ID``,
        ``SIRI_REQUEST_TIMEOUT`` (seconds) and ``SIRI_INITIAL_LOOKBACK_DAYS``.
        Explicit keyword arguments override environment values.
        """
        env = os.environ

        config_kwargs: dict[str, Any] = {}
        _ENV_CONFIG_MAP = {
            "SIRI_URL": "url",
            "SIRI_FEED_ID": "feed_id",
        }
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        timeout_env = env.get("SIRI_REQUEST_TIMEOUT")
        if timeout_env is not None and "request_timeout" not in overrides:
            config_kwargs["request_timeout"] = _as_float("SIRI_REQUEST_TIMEOUT", timeout_env)

        lookback_env = env.get("SIRI_INITIAL_LOOKBACK_DAYS")
        if lookback_env is not None and "initial_lookback" not in overrides:
            days = _as_float("SIRI_INITIAL_LOOKBACK_DAYS", lookback_env)
            config_kwargs["initial_lookback"] = timedelta(days=days)

        config_kwargs.update(overrides)
        config_kwargs.setdefault("url", "")

        return cls(**config_kwargs)

    @classmethod
    def from_mapping(cls, node: Mapping[str, Any]) -> SiriConfig:
        """Create configuration from an updater config node.

        Accepts the camelCase keys used in router updater configuration
        files: ``url``, ``feedId``, ``timeout`` and ``initialLookbackDays``.
        """
        url = node.get("url")
        if not isinstance(url, str):
            raise SiriConfigError("Missing mandatory 'url' parameter")

        config_kwargs: dict[str, Any] = {"url": url}

        feed_id = node.get("feedId")
        if feed_id is not None:
            config_kwargs["feed_id"] = str(feed_id)

        timeout = node.get("timeout")
        if timeout is not None:
            config_kwargs["request_timeout"] = _as_float("timeout", str(timeout))

        lookback_days = node.get("initialLookbackDays")
        if lookback_days is not None:
            config_kwargs["initial_lookback"] = timedelta(days=_as_float("initialLookbackDays", str(lookback_days)))

        return cls(**config_kwargs)
