"""
Error types raised by the delivery pipeline.

- ConfigurationError: handler constructed without a usable runner (fatal)
- TransportError: remote delivery failed (recoverable via local fallback)
- DeliveryError: the file-save offer failed (always surfaced)
"""
from typing import Optional


class TrialSinkError(Exception):
    """Base class for trialsink errors."""

    pass


class ConfigurationError(TrialSinkError):
    """Raised when the handler is constructed with a missing or malformed runner."""

    pass


class TransportError(TrialSinkError):
    """Raised when the collection endpoint answers with a non-2xx status or an unreadable body."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class DeliveryError(TrialSinkError):
    """Raised when the persistence sink declines or fails to save a file."""

    pass
