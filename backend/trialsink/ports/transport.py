"""
Network transport interface.

Remote delivery sends exactly one JSON request per submission through this
port. Connection, DNS and timeout failures are raised by the implementation
and reach the caller unchanged.
"""
import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
class TransportResponse:
    """Response from the collection endpoint."""

    status_code: int
    reason: str = ""
    content: bytes = b""
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self) -> Any:
        """Decode the body as JSON (raises ValueError if malformed)."""
        return json.loads(self.content.decode("utf-8"))


class TransportClient(ABC):
    """HTTP transport interface."""

    @abstractmethod
    async def post_json(
        self,
        url: str,
        body: Dict[str, Any],
        headers: Dict[str, str],
    ) -> TransportResponse:
        """
        POST a JSON body.

        Args:
            url: Absolute target URL
            body: JSON-compatible request body
            headers: Request headers (Content-Type is included by the caller)

        Returns:
            TransportResponse, whatever its status code
        """
        pass
