"""
trialsink - delivers experiment trial data to a collection server or a local file.
"""
from trialsink.core.environment import EnvironmentMode, Location, detect_environment
from trialsink.core.errors import (
    ConfigurationError,
    DeliveryError,
    TransportError,
    TrialSinkError,
)
from trialsink.schemas.submission import (
    CompleteSubmissionOptions,
    DeliveryMethod,
    DeliveryOptions,
    DeliveryResult,
    EnvironmentInfo,
    FileType,
    SubmissionEnvelope,
)
from trialsink.services.data_handler import TrialDataHandler

__version__ = "0.1.0"

__all__ = [
    "EnvironmentMode",
    "Location",
    "detect_environment",
    "ConfigurationError",
    "DeliveryError",
    "TransportError",
    "TrialSinkError",
    "CompleteSubmissionOptions",
    "DeliveryMethod",
    "DeliveryOptions",
    "DeliveryResult",
    "EnvironmentInfo",
    "FileType",
    "SubmissionEnvelope",
    "TrialDataHandler",
]
