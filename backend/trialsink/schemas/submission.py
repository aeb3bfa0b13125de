"""
Pydantic schemas for trial submissions.
"""
import enum
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from trialsink.core.config import settings
from trialsink.core.environment import EnvironmentMode


class FileType(str, enum.Enum):
    JSON = "json"
    CSV = "csv"


class DeliveryMethod(str, enum.Enum):
    LOCAL = "local"
    SERVER = "server"


MIME_TYPES = {
    FileType.JSON: "application/json",
    FileType.CSV: "text/csv",
}


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. 2025-03-01T14:05:09.123Z"""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class SubmissionEnvelope(BaseModel):
    """
    Everything submitted in one call: identifiers, payload and caller metadata.

    Metadata keys are merged last and win over the reserved fields, keeping the
    reserved field's position (a metadata "timestamp" replaces the generated one).
    No validation is applied to payload or metadata values.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    participant_id: str
    timestamp: str
    experiment_name: str
    data: Any = None
    environment: EnvironmentMode
    user_agent: str = ""

    @classmethod
    def build(
        cls,
        *,
        participant_id: str,
        experiment_name: str,
        data: Any,
        environment: EnvironmentMode,
        user_agent: str,
        metadata: Optional[Mapping[str, Any]] = None,
        timestamp: Optional[str] = None,
    ) -> "SubmissionEnvelope":
        """
        Assemble a fresh envelope.

        Args:
            participant_id: Participant identifier
            experiment_name: Experiment name
            data: Trial payload (any JSON-compatible value)
            environment: Detected environment mode
            user_agent: Client-identifying string
            metadata: Extra fields, merged last (last write wins)
            timestamp: Override for the generated timestamp

        Returns:
            Immutable SubmissionEnvelope
        """
        values: Dict[str, Any] = {
            "participant_id": participant_id,
            "timestamp": timestamp or utc_timestamp(),
            "experiment_name": experiment_name,
            "data": data,
            "environment": environment,
            "user_agent": user_agent,
        }
        values.update({str(key): value for key, value in (metadata or {}).items()})
        return cls.model_construct(**values)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-compatible dict of every field, extras included."""
        return self.model_dump(mode="json", warnings=False)


class DeliveryOptions(BaseModel):
    """Per-call delivery options (unknown keys are rejected)."""

    model_config = ConfigDict(extra="forbid")

    endpoint: str = settings.DEFAULT_ENDPOINT
    file_type: FileType = FileType.JSON
    filename: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)


class CompleteSubmissionOptions(BaseModel):
    """Options for submitting the complete experiment data set."""

    model_config = ConfigDict(extra="forbid")

    format: FileType = FileType.JSON
    filename: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)


class DeliveryResult(BaseModel):
    """Outcome of one submission."""

    method: DeliveryMethod
    success: bool = True
    result: Any = None  # parsed server response (server only)
    filename: Optional[str] = None  # generated or supplied filename (local only)


class EnvironmentInfo(BaseModel):
    """Read-only snapshot of the handler's environment."""

    is_local: bool
    mode: EnvironmentMode
    server_url: str
    participant_id: str
    protocol: str
    hostname: str
    fallback_enabled: bool


class TrialSubmission(BaseModel):
    """Request body sent to the collection endpoint."""

    trial_data: Any = None
    participant_id: str
    timestamp: str
    metadata: Dict[str, Any] = Field(default_factory=dict)


class CollectorReceipt(BaseModel):
    """Response from the reference collection endpoint."""

    status: str
    participant_id: str
    received: int
    endpoint: str
