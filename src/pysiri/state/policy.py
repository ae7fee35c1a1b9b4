"""Staleness gate.

Pure decision function over :class:`~pysiri.state.session.SessionState`.
It never mutates anything; the caller commits the returned state.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from pysiri.state.session import DatasetMode, SessionState


@dataclass(frozen=True, slots=True)
class GateDecision:
    """Outcome of :func:`evaluate_snapshot`.

    ``state`` is the state to commit (the input state on rejection).
    ``mode`` is how an accepted snapshot must be applied downstream; it is
    the mode in force *before* the transition, so the first accepted
    snapshot is reported as ``FULL``.
    """

    accepted: bool
    state: SessionState
    mode: DatasetMode


def evaluate_snapshot(state: SessionState, response_timestamp: datetime) -> GateDecision:
    """Decide whether a decoded snapshot is accepted.

    Policy:
    - Strictly older than the last accepted timestamp: reject, state unchanged.
    - Otherwise (equal timestamps included): accept, advance the timestamp and
      switch to ``INCREMENTAL``. The switch is one-way.
    """
    if response_timestamp < state.last_timestamp:
        return GateDecision(accepted=False, state=state, mode=state.mode)

    next_state = SessionState(last_timestamp=response_timestamp, mode=DatasetMode.INCREMENTAL)
    return GateDecision(accepted=True, state=next_state, mode=state.mode)
