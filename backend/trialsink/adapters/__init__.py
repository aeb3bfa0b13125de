"""
Adapters - concrete implementations of ports.

Follows hexagonal architecture pattern (ports & adapters).
"""
from trialsink.adapters.runner_memory import InMemoryRecordSource
from trialsink.adapters.storage_directory import DirectorySink
from trialsink.adapters.storage_memory import MemorySink, SavedFile
from trialsink.adapters.transport_httpx import HttpxTransport

__all__ = [
    "InMemoryRecordSource",
    "DirectorySink",
    "MemorySink",
    "SavedFile",
    "HttpxTransport",
]
