"""
Shared pytest fixtures.

Provides an in-memory runner, an in-memory sink, canned transports and
locations for local/server mode.
"""
import json
import pytest
from unittest.mock import AsyncMock

from trialsink.adapters.runner_memory import InMemoryRecordSource
from trialsink.adapters.storage_memory import MemorySink
from trialsink.core.environment import Location
from trialsink.ports.transport import TransportClient, TransportResponse


class FakeClock:
    """Manually advanced monotonic clock (seconds)."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def runner(clock):
    """Runner with two accumulated trials."""
    return InMemoryRecordSource(
        records=[
            {"trial_index": 0, "rt": 512, "response": "f", "stimulus": {"color": "red"}},
            {"trial_index": 1, "rt": 430, "response": "j", "correct": True},
        ],
        clock=clock,
    )


@pytest.fixture
def sink():
    return MemorySink()


@pytest.fixture
def server_location():
    return Location(protocol="https:", hostname="lab.example.org")


@pytest.fixture
def local_location():
    return Location(protocol="file:", hostname="")


def _json_response(body, status_code: int = 200, reason: str = "OK") -> TransportResponse:
    return TransportResponse(
        status_code=status_code,
        reason=reason,
        content=json.dumps(body).encode("utf-8"),
        headers={"content-type": "application/json"},
    )


@pytest.fixture
def json_response():
    """Factory for canned JSON transport responses."""
    return _json_response


@pytest.fixture
def ok_transport():
    """Transport that always answers 200 with a JSON body."""
    transport = AsyncMock(spec=TransportClient)
    transport.post_json.return_value = _json_response({"status": "ok", "id": 17})
    return transport


@pytest.fixture
def failing_transport():
    """Transport whose connection always fails."""
    transport = AsyncMock(spec=TransportClient)
    transport.post_json.side_effect = ConnectionError("connection refused")
    return transport
