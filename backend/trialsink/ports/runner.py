"""
Record source interface.

The host experiment runner owns the trial records and the participant
identifier generator. The delivery pipeline only reads from it.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List

# Callables a runner must expose; checked at handler construction.
REQUIRED_RUNNER_METHODS = ("random_id", "records", "total_time")


class RecordSource(ABC):
    """
    Host experiment runner interface.

    Any object exposing the same callables is accepted; subclassing is optional.
    """

    @abstractmethod
    def random_id(self) -> str:
        """
        Generate a random participant identifier.

        Returns:
            Identifier string
        """
        pass

    @abstractmethod
    def records(self) -> List[Dict[str, Any]]:
        """
        Get every trial record accumulated so far.

        Returns:
            List of trial records (JSON-compatible dicts)
        """
        pass

    @abstractmethod
    def total_time(self) -> float:
        """
        Get the elapsed session time.

        Returns:
            Milliseconds since the session started
        """
        pass
