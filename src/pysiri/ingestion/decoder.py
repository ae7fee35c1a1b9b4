"""SIRI Lite estimated-timetable decoder.

Decoding runs in two passes:

1. A typed deserialization of the raw JSON into the lenient wire schema
   (:mod:`pysiri.ingestion._wire`). JSON syntax errors and node type
   mismatches fail here.
2. A validation pass that walks the wire tree, enforces mandatory fields and
   parses timestamps while building the frozen domain models.

Both passes report failures as :class:`~pysiri.exceptions.SiriDecodeError`.
Decoding is all-or-nothing: the first failure aborts and nothing partially
built escapes.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime

from pydantic import ValidationError

from pysiri.exceptions import DecodeErrorKind, SiriDecodeError
from pysiri.ingestion._wire import WireCall, WireEnvelope, WireJourney, WireValue
from pysiri.models._base import parse_siri_timestamp
from pysiri.models.delivery import (
    EstimatedCall,
    EstimatedTimetableDelivery,
    EstimatedVehicleJourney,
    ServiceDelivery,
    VersionFrame,
)

_logger = logging.getLogger(__name__)

_JOURNEYS_KEY = "estimatedTimetableDelivery"
_CALLS_KEY = "estimatedCall"


def _where(journey_index: int | None, call_index: int | None) -> str:
    if journey_index is None:
        return "service delivery"
    if call_index is None:
        return f"journey {journey_index}"
    return f"journey {journey_index}, call {call_index}"


def _missing(field: str, journey_index: int | None = None, call_index: int | None = None) -> SiriDecodeError:
    return SiriDecodeError(
        f"Missing mandatory field {field} in {_where(journey_index, call_index)}",
        kind=DecodeErrorKind.MISSING_MANDATORY_FIELD,
        field=field,
        journey_index=journey_index,
        call_index=call_index,
    )


def _format_loc(loc: Sequence[int | str]) -> str:
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else part
    return path


def _from_validation_error(exc: ValidationError) -> SiriDecodeError:
    """Map the first wire-schema error onto a malformed-envelope decode error."""
    error = exc.errors()[0]
    if error["type"] == "json_invalid":
        return SiriDecodeError(
            f"Payload is not valid JSON: {error['msg']}",
            kind=DecodeErrorKind.MALFORMED_ENVELOPE,
        )

    loc = tuple(error["loc"])
    journey_index: int | None = None
    call_index: int | None = None
    field_loc = loc
    for pos, part in enumerate(loc[:-1]):
        nxt = loc[pos + 1]
        if part == _JOURNEYS_KEY and isinstance(nxt, int):
            journey_index = nxt
            field_loc = loc[pos + 2 :]
        elif part == _CALLS_KEY and isinstance(nxt, int):
            call_index = nxt

    field = _format_loc(field_loc) or None
    return SiriDecodeError(
        f"Malformed node {field or '<root>'} in {_where(journey_index, call_index)}: {error['msg']}",
        kind=DecodeErrorKind.MALFORMED_ENVELOPE,
        field=field,
        journey_index=journey_index,
        call_index=call_index,
    )


def _mandatory_str(value: str | None, field: str, journey_index: int | None = None) -> str:
    if value is None or not value.strip():
        raise _missing(field, journey_index)
    return value


def _mandatory_ref(
    node: WireValue | None,
    field: str,
    journey_index: int | None = None,
    call_index: int | None = None,
) -> str:
    if node is None:
        raise _missing(field, journey_index, call_index)
    if node.value is None or not node.value.strip():
        raise _missing(f"{field}.value", journey_index, call_index)
    return node.value


def _timestamp(
    value: str,
    field: str,
    journey_index: int | None = None,
    call_index: int | None = None,
) -> datetime:
    try:
        return parse_siri_timestamp(value)
    except ValueError as exc:
        raise SiriDecodeError(
            f"Invalid timestamp {value!r} for {field} in {_where(journey_index, call_index)}",
            kind=DecodeErrorKind.INVALID_TIMESTAMP,
            field=field,
            journey_index=journey_index,
            call_index=call_index,
        ) from exc


def _optional_timestamp(
    value: str | None,
    field: str,
    journey_index: int | None = None,
    call_index: int | None = None,
) -> datetime | None:
    if value is None:
        return None
    return _timestamp(value, field, journey_index, call_index)


def _first_name(names: list[WireValue] | None) -> str | None:
    """Keep only the first name of a multi-valued name array.

    SIRI allows several alternative names (e.g. per language); consumers of
    this feed have only ever used one, so the rest are dropped. An empty
    array, or a first entry without a value, counts as absent.
    """
    if not names:
        return None
    return names[0].value or None


def _decode_call(call: WireCall, journey_index: int, call_index: int) -> EstimatedCall:
    return EstimatedCall(
        stop_point_ref=_mandatory_ref(call.stop_point_ref, "stopPointRef", journey_index, call_index),
        aimed_arrival_time=_optional_timestamp(call.aimed_arrival_time, "aimedArrivalTime", journey_index, call_index),
        aimed_departure_time=_optional_timestamp(
            call.aimed_departure_time, "aimedDepartureTime", journey_index, call_index
        ),
        expected_arrival_time=_optional_timestamp(
            call.expected_arrival_time, "expectedArrivalTime", journey_index, call_index
        ),
        expected_departure_time=_optional_timestamp(
            call.expected_departure_time, "expectedDepartureTime", journey_index, call_index
        ),
    )


def _decode_journey(journey: WireJourney, index: int) -> EstimatedVehicleJourney:
    wire_calls = journey.estimated_calls.estimated_call if journey.estimated_calls is not None else None
    return EstimatedVehicleJourney(
        recorded_at_time=_optional_timestamp(journey.recorded_at_time, "recordedAtTime", index),
        dated_vehicle_journey_ref=_mandatory_ref(journey.dated_vehicle_journey_ref, "datedVehicleJourneyRef", index),
        destination_ref=_mandatory_ref(journey.destination_ref, "destinationRef", index),
        direction_ref=_mandatory_ref(journey.direction_ref, "directionRef", index),
        line_ref=_mandatory_ref(journey.line_ref, "lineRef", index),
        published_line_name=_first_name(journey.published_line_name),
        destination_name=_first_name(journey.destination_name),
        estimated_calls=tuple(
            _decode_call(call, index, call_index) for call_index, call in enumerate(wire_calls or ())
        ),
    )


def decode_service_delivery(raw: bytes | str) -> ServiceDelivery:
    """Decode a SIRI Lite ET JSON document into a :class:`ServiceDelivery`.

    Parameters
    ----------
    raw : bytes or str
        The response body as returned by the feed.

    Returns
    -------
    ServiceDelivery
        Holds exactly one estimated-timetable delivery with one version
        frame containing every journey of the feed, in feed order.

    Raises
    ------
    SiriDecodeError
        On any structural problem. ``kind`` tells malformed envelopes,
        missing mandatory fields and invalid timestamps apart.
    """
    try:
        envelope = WireEnvelope.model_validate_json(raw)
    except ValidationError as exc:
        raise _from_validation_error(exc) from exc

    if envelope.siri is None:
        raise SiriDecodeError("Missing Siri root node", kind=DecodeErrorKind.MALFORMED_ENVELOPE, field="Siri")
    wire_delivery = envelope.siri.service_delivery
    if wire_delivery is None:
        raise SiriDecodeError(
            "Missing Siri.serviceDelivery node",
            kind=DecodeErrorKind.MALFORMED_ENVELOPE,
            field="Siri.serviceDelivery",
        )

    response_timestamp = _timestamp(
        _mandatory_str(wire_delivery.response_timestamp, "responseTimestamp"),
        "responseTimestamp",
    )
    producer_ref = _mandatory_str(wire_delivery.producer_ref, "producerRef")

    journeys = tuple(
        _decode_journey(journey, index)
        for index, journey in enumerate(wire_delivery.estimated_timetable_delivery or ())
    )
    _logger.debug("Decoded %d vehicle journeys from %s at %s", len(journeys), producer_ref, response_timestamp)

    return ServiceDelivery(
        response_timestamp=response_timestamp,
        producer_ref=producer_ref,
        estimated_timetable_deliveries=(
            EstimatedTimetableDelivery(version_frames=(VersionFrame(vehicle_journeys=journeys),)),
        ),
    )
