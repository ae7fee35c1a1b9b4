"""Estimated-timetable service delivery models."""

from __future__ import annotations

from typing import Annotated

from pydantic import AwareDatetime, StringConstraints

from pysiri.models._base import SiriBaseModel

NonEmptyStr = Annotated[str, StringConstraints(min_length=1)]


class EstimatedCall(SiriBaseModel):
    """A single stop visit within a vehicle journey.

    Parameters
    ----------
    stop_point_ref : str
        Stop point identifier.
    aimed_arrival_time, aimed_departure_time : datetime or None
        Scheduled times. ``None`` when the feed omits them.
    expected_arrival_time, expected_departure_time : datetime or None
        Predicted times. ``None`` when the feed omits them.
    """

    stop_point_ref: NonEmptyStr
    aimed_arrival_time: AwareDatetime | None = None
    aimed_departure_time: AwareDatetime | None = None
    expected_arrival_time: AwareDatetime | None = None
    expected_departure_time: AwareDatetime | None = None


class EstimatedVehicleJourney(SiriBaseModel):
    """One dated run of a vehicle, with its predicted calls.

    ``published_line_name`` and ``destination_name`` hold at most one value.
    The feed encodes both as arrays of names; only the first entry is kept.
    """

    recorded_at_time: AwareDatetime | None = None
    dated_vehicle_journey_ref: NonEmptyStr
    destination_ref: NonEmptyStr
    direction_ref: NonEmptyStr
    line_ref: NonEmptyStr
    published_line_name: str | None = None
    destination_name: str | None = None
    estimated_calls: tuple[EstimatedCall, ...] = ()


class VersionFrame(SiriBaseModel):
    vehicle_journeys: tuple[EstimatedVehicleJourney, ...] = ()


class EstimatedTimetableDelivery(SiriBaseModel):
    version_frames: tuple[VersionFrame, ...] = ()


class ServiceDelivery(SiriBaseModel):
    """Top-level decoded SIRI service delivery."""

    response_timestamp: AwareDatetime
    producer_ref: NonEmptyStr
    estimated_timetable_deliveries: tuple[EstimatedTimetableDelivery, ...] = ()

    @property
    def vehicle_journeys(self) -> tuple[EstimatedVehicleJourney, ...]:
        """All journeys across deliveries and version frames, in feed order."""
        return tuple(
            journey
            for delivery in self.estimated_timetable_deliveries
            for frame in delivery.version_frames
            for journey in frame.vehicle_journeys
        )
