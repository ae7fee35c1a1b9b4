"""Poll outcome types returned by :meth:`SiriLiteEtSource.poll`."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from pysiri.exceptions import SiriError
from pysiri.models.delivery import EstimatedTimetableDelivery
from pysiri.state.session import DatasetMode


class NoUpdateReason(StrEnum):
    FETCH_FAILED = "fetch_failed"
    DECODE_FAILED = "decode_failed"
    STALE_SNAPSHOT = "stale_snapshot"


@dataclass(frozen=True, slots=True)
class Accepted:
    """A new snapshot was accepted.

    ``mode`` tells the consumer whether ``deliveries`` replace its whole
    timetable view (``FULL``) or apply on top of it (``INCREMENTAL``).
    """

    deliveries: tuple[EstimatedTimetableDelivery, ...]
    mode: DatasetMode
    response_timestamp: datetime
    producer_ref: str

    @property
    def full_dataset(self) -> bool:
        return self.mode is DatasetMode.FULL


@dataclass(frozen=True, slots=True)
class NoUpdate:
    """Nothing new this poll. ``error`` is set for fetch and decode failures."""

    reason: NoUpdateReason
    error: SiriError | None = None


PollResult = Accepted | NoUpdate
