"""Polling session state.

The only state a source carries across polls: the response timestamp of the
last accepted snapshot and whether the next accepted snapshot is a full
dataset or an incremental update.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from enum import StrEnum

from pydantic import AwareDatetime, BaseModel, ConfigDict


class DatasetMode(StrEnum):
    FULL = "full"
    INCREMENTAL = "incremental"


class SessionState(BaseModel):
    """Immutable snapshot of a source's polling state.

    Parameters
    ----------
    last_timestamp : datetime
        Response timestamp of the last accepted snapshot (or the synthetic
        start-up value, see :meth:`initial`).
    mode : DatasetMode
        How the *next* accepted snapshot must be interpreted.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    last_timestamp: AwareDatetime
    mode: DatasetMode = DatasetMode.FULL

    @classmethod
    def initial(cls, now: datetime, lookback: timedelta) -> SessionState:
        """State of a freshly created source."""
        return cls(last_timestamp=now - lookback, mode=DatasetMode.FULL)
