"""
Remote delivery - posts a submission envelope to the collection endpoint.

Exactly one request per call; no retries. Non-2xx statuses and unreadable
bodies raise TransportError, transport exceptions propagate unchanged.
"""
import logging

from trialsink.core.errors import TransportError
from trialsink.ports.transport import TransportClient
from trialsink.schemas.submission import (
    DeliveryMethod,
    DeliveryOptions,
    DeliveryResult,
    SubmissionEnvelope,
)

logger = logging.getLogger(__name__)

JSON_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


class RemoteDelivery:
    """Sends envelopes to {server_url}{endpoint}."""

    def __init__(self, transport: TransportClient, server_url: str):
        """
        Initialize remote delivery.

        Args:
            transport: Transport used for the POST
            server_url: Base URL of the collection server (no trailing slash)
        """
        self.transport = transport
        self.server_url = server_url

    def build_url(self, endpoint: str) -> str:
        return f"{self.server_url}{endpoint}"

    @staticmethod
    def build_body(envelope: SubmissionEnvelope) -> dict:
        """Wire body: payload, identifiers and the full envelope as metadata."""
        metadata = envelope.to_dict()
        return {
            "trial_data": metadata.get("data"),
            "participant_id": metadata.get("participant_id"),
            "timestamp": metadata.get("timestamp"),
            "metadata": metadata,
        }

    async def post(self, envelope: SubmissionEnvelope, options: DeliveryOptions) -> DeliveryResult:
        """
        POST the envelope.

        Returns:
            DeliveryResult with method=server and the parsed response body

        Raises:
            TransportError: Non-2xx status or malformed JSON response
        """
        url = self.build_url(options.endpoint)
        logger.info(f"Sending data to server: {url}")

        response = await self.transport.post_json(url, self.build_body(envelope), dict(JSON_HEADERS))

        if not response.ok:
            raise TransportError(
                f"Server error: {response.status_code} {response.reason}".rstrip(),
                status_code=response.status_code,
            )

        try:
            result = response.json()
        except ValueError as e:
            raise TransportError(
                f"Malformed response from {url}: {e}",
                status_code=response.status_code,
            ) from e

        logger.info(f"Server response: {result}")
        return DeliveryResult(method=DeliveryMethod.SERVER, success=True, result=result)
