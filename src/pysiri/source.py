"""Polling source for SIRI Lite estimated-timetable feeds."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

import aiohttp

from pysiri._redact import preview_payload, redact_url
from pysiri._transport import Fetcher, HttpFetcher
from pysiri.config import SiriConfig
from pysiri.exceptions import SiriDecodeError, SiriError, SiriTransportError
from pysiri.ingestion.decoder import decode_service_delivery
from pysiri.models.poll import Accepted, NoUpdate, NoUpdateReason, PollResult
from pysiri.state.policy import evaluate_snapshot
from pysiri.state.session import DatasetMode, SessionState

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)


class SiriLiteEtSource:
    """Estimated-timetable source for one SIRI Lite feed.

    Each :meth:`poll` fetches the feed once, decodes it and runs the
    staleness gate. Polls on one instance must not overlap: the gate reads
    and then replaces the session state, so callers dispatching from several
    tasks have to serialize them (one scheduler task, or an
    ``asyncio.Lock`` around ``poll``).

    Usage::

        async with SiriLiteEtSource(SiriConfig(url=...)) as source:
            result = await source.poll()
            if isinstance(result, Accepted):
                apply(result.deliveries, full=result.full_dataset)
    """

    def __init__(
        self,
        config: SiriConfig,
        *,
        fetcher: Fetcher | None = None,
        session: aiohttp.ClientSession | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._config = config
        self._fetcher = fetcher
        self._external_session = session is not None
        self._http_session = session
        self._state = SessionState.initial(clock(), config.initial_lookback)

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> SiriLiteEtSource:
        if self._fetcher is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._fetcher = HttpFetcher(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
            self._fetcher = None

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def mode(self) -> DatasetMode:
        """How the next accepted snapshot will be reported."""
        return self._state.mode

    @property
    def full_dataset(self) -> bool:
        return self._state.mode is DatasetMode.FULL

    @property
    def feed_id(self) -> str | None:
        return self._config.feed_id

    @property
    def url(self) -> str:
        return self._config.url

    def __repr__(self) -> str:
        return f"SiriLiteEtSource({redact_url(self._config.url)})"

    # ------------------------------------------------------------------
    # Polling
    # ------------------------------------------------------------------

    def _require_fetcher(self) -> Fetcher:
        if self._fetcher is None:
            raise SiriError("Source not initialized. Use 'async with SiriLiteEtSource(...) as source:'")
        return self._fetcher

    async def poll(self) -> PollResult:
        """Fetch, decode and gate one snapshot.

        Fetch and decode failures are logged and returned as
        :class:`NoUpdate`; they never raise. The session state changes only
        when an :class:`Accepted` result is returned.
        """
        fetcher = self._require_fetcher()
        safe_url = redact_url(self._config.url)

        started = time.monotonic()
        try:
            raw = await fetcher.fetch()
        except SiriTransportError as exc:
            _logger.warning(
                "Failed to fetch SIRI Lite ET feed from %s after %d ms: %s",
                safe_url,
                _elapsed_ms(started),
                exc,
            )
            return NoUpdate(NoUpdateReason.FETCH_FAILED, exc)

        if raw is None:
            _logger.warning("SIRI Lite ET feed %s returned no data", safe_url)
            return NoUpdate(NoUpdateReason.FETCH_FAILED)
        _logger.info("Fetching ET data took %d ms", _elapsed_ms(started))

        started = time.monotonic()
        try:
            delivery = decode_service_delivery(raw)
        except SiriDecodeError as exc:
            _logger.warning("Failed to decode SIRI Lite ET feed from %s (%s): %s", safe_url, exc.describe(), exc)
            _logger.debug("Rejected payload: %s", preview_payload(raw))
            return NoUpdate(NoUpdateReason.DECODE_FAILED, exc)
        _logger.info("Decoding ET data took %d ms", _elapsed_ms(started))

        decision = evaluate_snapshot(self._state, delivery.response_timestamp)
        if not decision.accepted:
            _logger.info(
                "Newer data has already been processed (snapshot %s, last accepted %s)",
                delivery.response_timestamp.isoformat(),
                self._state.last_timestamp.isoformat(),
            )
            return NoUpdate(NoUpdateReason.STALE_SNAPSHOT)

        self._state = decision.state
        return Accepted(
            deliveries=delivery.estimated_timetable_deliveries,
            mode=decision.mode,
            response_timestamp=delivery.response_timestamp,
            producer_ref=delivery.producer_ref,
        )
