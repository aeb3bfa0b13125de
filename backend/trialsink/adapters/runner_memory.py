"""
In-memory experiment runner.

Accumulates trial records in a list and measures elapsed time from
construction. Used when trialsink drives an experiment directly instead of
sitting behind another runner.
"""
import time
import uuid
from typing import Any, Callable, Dict, Iterable, List, Optional

from trialsink.ports.runner import RecordSource


class InMemoryRecordSource(RecordSource):
    """List-backed record source."""

    def __init__(
        self,
        records: Optional[Iterable[Dict[str, Any]]] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize runner.

        Args:
            records: Optional initial trial records
            clock: Monotonic clock in seconds (injectable for tests)
        """
        self._records: List[Dict[str, Any]] = list(records or [])
        self._clock = clock
        self._started = clock()

    def add(self, record: Dict[str, Any]) -> None:
        """Append one trial record."""
        self._records.append(record)

    def random_id(self) -> str:
        return uuid.uuid4().hex

    def records(self) -> List[Dict[str, Any]]:
        return list(self._records)

    def total_time(self) -> float:
        """Milliseconds since the runner was created."""
        return round((self._clock() - self._started) * 1000)
