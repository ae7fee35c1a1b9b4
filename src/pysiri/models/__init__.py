"""Data models for SIRI estimated-timetable deliveries."""

from pysiri.models._base import SiriBaseModel, parse_siri_timestamp
from pysiri.models.delivery import (
    EstimatedCall,
    EstimatedTimetableDelivery,
    EstimatedVehicleJourney,
    ServiceDelivery,
    VersionFrame,
)
from pysiri.models.poll import Accepted, NoUpdate, NoUpdateReason, PollResult

__all__ = [
    "Accepted",
    "EstimatedCall",
    "EstimatedTimetableDelivery",
    "EstimatedVehicleJourney",
    "NoUpdate",
    "NoUpdateReason",
    "PollResult",
    "ServiceDelivery",
    "SiriBaseModel",
    "VersionFrame",
    "parse_siri_timestamp",
]
