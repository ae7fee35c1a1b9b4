"""State layer.

Holds the polling session state and the staleness gate that is the only
code allowed to compute its successor.
"""

from pysiri.state.policy import GateDecision, evaluate_snapshot
from pysiri.state.session import DatasetMode, SessionState

__all__ = ["DatasetMode", "GateDecision", "SessionState", "evaluate_snapshot"]
