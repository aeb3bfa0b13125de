"""
Persistence sink interface.

Stands in for the host's "offer this file to the user" capability: the sink
receives finished bytes, a filename and a MIME type.
"""
from abc import ABC, abstractmethod


class PersistenceSink(ABC):
    """File-save interface."""

    @abstractmethod
    async def save(self, content: bytes, filename: str, mime_type: str) -> None:
        """
        Offer a file to the user.

        Args:
            content: Encoded file body
            filename: Suggested filename
            mime_type: MIME type (application/json, text/csv)

        Raises:
            Any exception if the offer is declined or fails
        """
        pass
