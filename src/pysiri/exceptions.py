"""Custom exception hierarchy for pysiri."""

from __future__ import annotations

from enum import StrEnum


class SiriError(Exception):
    """Base exception for all pysiri errors."""


class SiriConfigError(SiriError):
    """Invalid or missing configuration."""


class SiriTransportError(SiriError):
    """HTTP-level failure (network, timeout, non-200)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        url: str = "",
    ) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(message)


class DecodeErrorKind(StrEnum):
    MALFORMED_ENVELOPE = "malformed_envelope"
    MISSING_MANDATORY_FIELD = "missing_mandatory_field"
    INVALID_TIMESTAMP = "invalid_timestamp"


class SiriDecodeError(SiriError):
    """The feed payload could not be decoded into a service delivery.

    Decoding is all-or-nothing, so this error always means that no part of
    the payload was used. ``field`` is the JSON path of the offending node
    (e.g. ``"lineRef.value"``) and ``journey_index`` / ``call_index`` locate
    it inside the ``estimatedTimetableDelivery`` array when applicable.
    """

    def __init__(
        self,
        message: str,
        *,
        kind: DecodeErrorKind,
        field: str | None = None,
        journey_index: int | None = None,
        call_index: int | None = None,
    ) -> None:
        self.kind = kind
        self.field = field
        self.journey_index = journey_index
        self.call_index = call_index
        super().__init__(message)

    def describe(self) -> str:
        """One-line location summary for log messages."""
        parts = [self.kind.value]
        if self.field:
            parts.append(f"field={self.field}")
        if self.journey_index is not None:
            parts.append(f"journey={self.journey_index}")
        if self.call_index is not None:
            parts.append(f"call={self.call_index}")
        return " ".join(parts)
