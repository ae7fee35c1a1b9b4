"""Wire schema for SIRI Lite estimated-timetable JSON.

These models mirror the vendor JSON shape one-to-one and are deliberately
lenient: every node is optional so that absence can be reported by the
decoder with a precise field name and journey index, instead of surfacing
as a generic validation error. Only *type* mismatches (an array where an
object is expected, etc.) fail at this layer.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _WireModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
        # Some producers emit numeric refs ({"value": 42}).
        coerce_numbers_to_str=True,
    )


class WireValue(_WireModel):
    """The ``{"value": ...}`` wrapper used for refs and names."""

    value: str | None = None


class WireCall(_WireModel):
    stop_point_ref: WireValue | None = None
    aimed_arrival_time: str | None = None
    aimed_departure_time: str | None = None
    expected_arrival_time: str | None = None
    expected_departure_time: str | None = None


class WireCalls(_WireModel):
    estimated_call: list[WireCall] | None = None


class WireJourney(_WireModel):
    """One element of the ``estimatedTimetableDelivery`` array.

    The vendor encoding flattens SIRI's delivery/frame nesting: each array
    element is an estimated vehicle journey.
    """

    recorded_at_time: str | None = None
    dated_vehicle_journey_ref: WireValue | None = None
    destination_ref: WireValue | None = None
    direction_ref: WireValue | None = None
    line_ref: WireValue | None = None
    published_line_name: list[WireValue] | None = None
    destination_name: list[WireValue] | None = None
    estimated_calls: WireCalls | None = None


class WireServiceDelivery(_WireModel):
    response_timestamp: str | None = None
    producer_ref: str | None = None
    estimated_timetable_delivery: list[WireJourney] | None = None


class WireSiri(_WireModel):
    service_delivery: WireServiceDelivery | None = None


class WireEnvelope(_WireModel):
    siri: WireSiri | None = Field(default=None, alias="Siri")
