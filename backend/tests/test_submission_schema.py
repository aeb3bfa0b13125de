"""
Tests for submission schemas.

Validates:
- Envelope field order and metadata merge (last write wins)
- Envelope immutability
- Timestamp format
- DeliveryOptions defaults and file type validation
"""
import re
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from trialsink.core.environment import EnvironmentMode
from trialsink.schemas.submission import (
    CompleteSubmissionOptions,
    DeliveryOptions,
    FileType,
    SubmissionEnvelope,
    utc_timestamp,
)


def make_envelope(**overrides):
    params = dict(
        participant_id="p123",
        experiment_name="stroop",
        data=[{"rt": 400}],
        environment=EnvironmentMode.SERVER,
        user_agent="trialsink/test",
        timestamp="2025-03-01T14:05:09.123Z",
    )
    params.update(overrides)
    return SubmissionEnvelope.build(**params)


class TestUtcTimestamp:
    """Tests for utc_timestamp."""

    def test_format(self):
        """Test millisecond precision with Z suffix."""
        ts = utc_timestamp(datetime(2025, 3, 1, 14, 5, 9, 123456, tzinfo=timezone.utc))
        assert ts == "2025-03-01T14:05:09.123Z"

    def test_now_matches_pattern(self):
        assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z", utc_timestamp())


class TestSubmissionEnvelope:
    """Tests for SubmissionEnvelope.build."""

    def test_field_order(self):
        """Test reserved fields come first in a fixed order."""
        envelope = make_envelope(metadata={"session": 2})
        assert list(envelope.to_dict().keys()) == [
            "participant_id",
            "timestamp",
            "experiment_name",
            "data",
            "environment",
            "user_agent",
            "session",
        ]

    def test_environment_serialized_as_value(self):
        assert make_envelope().to_dict()["environment"] == "server"

    def test_metadata_merged(self):
        """Test extra metadata keys are added to the envelope."""
        envelope = make_envelope(metadata={"condition": "congruent", "block": 3})
        data = envelope.to_dict()
        assert data["condition"] == "congruent"
        assert data["block"] == 3

    def test_metadata_overrides_reserved_field(self):
        """Test a metadata key named like a reserved field replaces it in place."""
        envelope = make_envelope(metadata={"timestamp": "custom"})
        data = envelope.to_dict()
        assert data["timestamp"] == "custom"
        assert list(data.keys())[1] == "timestamp"
        assert envelope.timestamp == "custom"

    def test_generated_timestamp(self):
        """Test a timestamp is generated when none is given."""
        envelope = make_envelope(timestamp=None)
        assert envelope.timestamp.endswith("Z")

    def test_immutable(self):
        """Test envelopes cannot be modified after construction."""
        envelope = make_envelope()
        with pytest.raises(ValidationError):
            envelope.participant_id = "other"


class TestDeliveryOptions:
    """Tests for DeliveryOptions."""

    def test_defaults(self):
        options = DeliveryOptions()
        assert options.endpoint == "/api/trial"
        assert options.file_type == FileType.JSON
        assert options.filename is None
        assert options.metadata == {}

    def test_file_type_from_string(self):
        assert DeliveryOptions(file_type="csv").file_type == FileType.CSV

    def test_unknown_file_type_rejected(self):
        with pytest.raises(ValidationError):
            DeliveryOptions(file_type="xml")

    def test_misspelled_key_rejected(self):
        """Test camelCase keys are reported, not silently ignored."""
        with pytest.raises(ValidationError, match="fileType"):
            DeliveryOptions.model_validate({"fileType": "csv"})


class TestCompleteSubmissionOptions:
    """Tests for CompleteSubmissionOptions."""

    def test_defaults(self):
        options = CompleteSubmissionOptions()
        assert options.format == FileType.JSON
        assert options.filename is None
        assert options.metadata == {}

    def test_format_from_string(self):
        assert CompleteSubmissionOptions.model_validate({"format": "csv"}).format == FileType.CSV

    def test_unknown_key_rejected(self):
        with pytest.raises(ValidationError, match="file_type"):
            CompleteSubmissionOptions.model_validate({"file_type": "csv"})
