"""HTTP fetcher for SIRI Lite feeds."""

from __future__ import annotations

import logging
from typing import Protocol

import aiohttp

from pysiri._constants import ACCEPT_JSON, USER_AGENT
from pysiri._redact import redact_url
from pysiri.config import SiriConfig
from pysiri.exceptions import SiriTransportError

_logger = logging.getLogger(__name__)


class Fetcher(Protocol):
    """Structural fetcher interface used by the source.

    Returns the raw response body, or ``None`` when the feed had nothing to
    deliver. Transport failures are raised as
    :class:`~pysiri.exceptions.SiriTransportError`.
    """

    async def fetch(self) -> bytes | None:
        ...


class HttpFetcher:
    """Plain HTTP GET against the configured feed URL. No retries."""

    def __init__(self, config: SiriConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    async def fetch(self) -> bytes | None:
        url = self._config.url
        safe_url = redact_url(url)
        headers = {
            "accept": ACCEPT_JSON,
            "user-agent": USER_AGENT,
        }

        _logger.debug("GET %s", safe_url)

        try:
            async with self._http.get(url, headers=headers, timeout=self._timeout) as resp:
                if resp.status == 204:
                    return None
                body = await resp.read()
                if resp.status != 200:
                    raise SiriTransportError(
                        f"HTTP {resp.status} from {safe_url}: {body[:200]!r}",
                        status_code=resp.status,
                        url=safe_url,
                    )
        except SiriTransportError:
            raise
        except TimeoutError as exc:
            raise SiriTransportError(
                f"Request to {safe_url} timed out after {self._config.request_timeout}s",
                url=safe_url,
            ) from exc
        except aiohttp.ClientError as exc:
            raise SiriTransportError(
                f"Request to {safe_url} failed: {exc}",
                url=safe_url,
            ) from exc

        return body or None
