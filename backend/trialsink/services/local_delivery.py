"""
Local delivery - serializes a submission envelope and offers it as a file.

- json: the whole envelope, pretty-printed (2-space indent), 1.0 written as 1
- csv: only the payload, wrapped in a list if needed, via encode_csv

Default filename: {experiment_name}_{participant_id}_{timestamp}.{file_type},
with ':' and '.' in the timestamp replaced by '-'. The parts come from the
handler (its configured ids and generated timestamp), not from metadata.
"""
import json
import logging
import re

from trialsink.core.errors import DeliveryError
from trialsink.export.csv_encoder import encode_csv
from trialsink.export.flatten import json_ready
from trialsink.ports.storage import PersistenceSink
from trialsink.schemas.submission import (
    MIME_TYPES,
    DeliveryMethod,
    DeliveryOptions,
    DeliveryResult,
    FileType,
    SubmissionEnvelope,
)

logger = logging.getLogger(__name__)

_UNSAFE_TIMESTAMP_CHARS = re.compile(r"[:.]")


def sanitize_timestamp(timestamp: str) -> str:
    """2025-03-01T14:05:09.123Z → 2025-03-01T14-05-09-123Z"""
    return _UNSAFE_TIMESTAMP_CHARS.sub("-", str(timestamp))


def build_filename(experiment_name: str, participant_id: str, timestamp: str, file_type: FileType) -> str:
    return f"{experiment_name}_{participant_id}_{sanitize_timestamp(timestamp)}.{file_type.value}"


def serialize_envelope(envelope: SubmissionEnvelope, file_type: FileType) -> bytes:
    """Encode the envelope (json) or its payload (csv) as UTF-8 bytes."""
    if file_type == FileType.CSV:
        payload = envelope.to_dict().get("data")
        rows = payload if isinstance(payload, list) else [payload]
        return encode_csv(rows).encode("utf-8")

    return json.dumps(json_ready(envelope.to_dict()), indent=2, ensure_ascii=False).encode("utf-8")


class LocalDelivery:
    """Hands serialized envelopes to a persistence sink."""

    def __init__(self, sink: PersistenceSink):
        """
        Initialize local delivery.

        Args:
            sink: Where files are offered
        """
        self.sink = sink

    async def save(
        self,
        envelope: SubmissionEnvelope,
        options: DeliveryOptions,
        *,
        experiment_name: str,
        participant_id: str,
        timestamp: str,
    ) -> DeliveryResult:
        """
        Serialize and offer the envelope.

        The default filename is built from the caller's own identifiers and
        generated timestamp, never from envelope fields (metadata may have
        replaced those).

        Args:
            envelope: Envelope to save
            options: Delivery options (file_type, filename)
            experiment_name: Experiment name for the default filename
            participant_id: Participant id for the default filename
            timestamp: Generated submission timestamp for the default filename

        Returns:
            DeliveryResult with method=local and the filename used

        Raises:
            DeliveryError: If the sink declines or fails
        """
        file_type = options.file_type
        filename = options.filename or build_filename(
            experiment_name, participant_id, timestamp, file_type
        )
        content = serialize_envelope(envelope, file_type)
        mime_type = MIME_TYPES[file_type]

        logger.debug(f"Offering file: {filename}, type: {mime_type}")
        try:
            await self.sink.save(content, filename, mime_type)
        except Exception as e:
            logger.error(f"Download failed: {e}")
            raise DeliveryError(f"Failed to save {filename}: {e}") from e

        logger.info(f"Data saved locally as: {filename}")
        return DeliveryResult(method=DeliveryMethod.LOCAL, success=True, filename=filename)
