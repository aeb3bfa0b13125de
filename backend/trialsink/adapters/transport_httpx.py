"""
httpx implementation of the transport interface.

Either borrows a caller-owned AsyncClient (connection reuse, test transports)
or opens a short-lived client per request.
"""
import logging
from typing import Any, Dict, Optional

import httpx

from trialsink.core.config import settings
from trialsink.ports.transport import TransportClient, TransportResponse

logger = logging.getLogger(__name__)


class HttpxTransport(TransportClient):
    """Async HTTP transport backed by httpx."""

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize transport.

        Args:
            client: Optional AsyncClient to reuse (caller keeps ownership)
            timeout: Request timeout in seconds (defaults to settings.REQUEST_TIMEOUT)
        """
        self.client = client
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT

    async def post_json(
        self,
        url: str,
        body: Dict[str, Any],
        headers: Dict[str, str],
    ) -> TransportResponse:
        """POST a JSON body and return the raw response."""
        if self.client is not None:
            response = await self.client.post(url, json=body, headers=headers, timeout=self.timeout)
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(url, json=body, headers=headers)

        logger.debug(f"POST {url}: HTTP {response.status_code}")
        return TransportResponse(
            status_code=response.status_code,
            reason=response.reason_phrase,
            content=response.content,
            headers=dict(response.headers),
        )
