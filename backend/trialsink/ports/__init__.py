"""
Ports - interface definitions for external dependencies.

Follows hexagonal architecture pattern (ports & adapters).
Ports define interfaces, adapters provide concrete implementations.
"""
from trialsink.ports.runner import RecordSource, REQUIRED_RUNNER_METHODS
from trialsink.ports.storage import PersistenceSink
from trialsink.ports.transport import TransportClient, TransportResponse

__all__ = [
    "RecordSource",
    "REQUIRED_RUNNER_METHODS",
    "PersistenceSink",
    "TransportClient",
    "TransportResponse",
]
