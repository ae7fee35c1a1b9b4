from __future__ import annotations

from typing import Any

import aiohttp
import pytest

from pysiri._transport import HttpFetcher
from pysiri.config import SiriConfig
from pysiri.exceptions import SiriTransportError


class _FakeResponse:
    def __init__(self, status: int, body: bytes) -> None:
        self.status = status
        self._body = body

    async def read(self) -> bytes:
        return self._body

    async def __aenter__(self) -> _FakeResponse:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        return None


class _FakeSession:
    """Stands in for ``aiohttp.ClientSession.get``."""

    def __init__(self, status: int = 200, body: bytes = b"{}", error: Exception | None = None) -> None:
        self._status = status
        self._body = body
        self._error = error
        self.requests: list[dict[str, Any]] = []

    def get(self, url: str, *, headers: dict[str, str], timeout: aiohttp.ClientTimeout) -> _FakeResponse:
        self.requests.append({"url": url, "headers": headers, "timeout": timeout})
        if self._error is not None:
            raise self._error
        return _FakeResponse(self._status, self._body)


_CONFIG = SiriConfig(url="https://example.org/et.json?apikey=s3cret", request_timeout=7.0)


def _fetcher(session: _FakeSession) -> HttpFetcher:
    return HttpFetcher(_CONFIG, session)  # type: ignore[arg-type]


@pytest.mark.asyncio
async def test_fetch_returns_body_and_sends_accept_json() -> None:
    session = _FakeSession(body=b'{"Siri": {}}')

    body = await _fetcher(session).fetch()

    assert body == b'{"Siri": {}}'
    (request,) = session.requests
    assert request["url"] == _CONFIG.url
    assert request["headers"]["accept"] == "application/json"
    assert request["timeout"].total == 7.0


@pytest.mark.asyncio
async def test_no_content_returns_none() -> None:
    assert await _fetcher(_FakeSession(status=204, body=b"")).fetch() is None


@pytest.mark.asyncio
async def test_empty_body_returns_none() -> None:
    assert await _fetcher(_FakeSession(body=b"")).fetch() is None


@pytest.mark.asyncio
async def test_non_200_raises_transport_error() -> None:
    with pytest.raises(SiriTransportError) as excinfo:
        await _fetcher(_FakeSession(status=503, body=b"maintenance")).fetch()

    assert excinfo.value.status_code == 503
    assert "s3cret" not in str(excinfo.value)
    assert "s3cret" not in excinfo.value.url


@pytest.mark.asyncio
async def test_client_error_is_wrapped() -> None:
    session = _FakeSession(error=aiohttp.ClientConnectionError("connection refused"))

    with pytest.raises(SiriTransportError) as excinfo:
        await _fetcher(session).fetch()

    assert excinfo.value.status_code is None
    assert isinstance(excinfo.value.__cause__, aiohttp.ClientConnectionError)


@pytest.mark.asyncio
async def test_timeout_is_wrapped() -> None:
    with pytest.raises(SiriTransportError, match="timed out"):
        await _fetcher(_FakeSession(error=TimeoutError())).fetch()
