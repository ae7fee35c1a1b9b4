"""pysiri - Async polling source for SIRI Lite estimated-timetable feeds."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pysiri")
except PackageNotFoundError:
    __version__ = "0+local"
from pysiri.config import SiriConfig
from pysiri.exceptions import (
    DecodeErrorKind,
    SiriConfigError,
    SiriDecodeError,
    SiriError,
    SiriTransportError,
)
from pysiri.ingestion import decode_service_delivery
from pysiri.models import (
    Accepted,
    EstimatedCall,
    EstimatedTimetableDelivery,
    EstimatedVehicleJourney,
    NoUpdate,
    NoUpdateReason,
    PollResult,
    ServiceDelivery,
    VersionFrame,
)
from pysiri.source import SiriLiteEtSource
from pysiri.state import DatasetMode, GateDecision, SessionState, evaluate_snapshot

__all__ = [
    "__version__",
    "Accepted",
    "DatasetMode",
    "DecodeErrorKind",
    "EstimatedCall",
    "EstimatedTimetableDelivery",
    "EstimatedVehicleJourney",
    "GateDecision",
    "NoUpdate",
    "NoUpdateReason",
    "PollResult",
    "ServiceDelivery",
    "SessionState",
    "SiriConfig",
    "SiriConfigError",
    "SiriDecodeError",
    "SiriError",
    "SiriLiteEtSource",
    "SiriTransportError",
    "VersionFrame",
    "decode_service_delivery",
    "evaluate_snapshot",
]
