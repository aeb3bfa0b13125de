"""
Trial data handler - routes submissions to the server or to a local file.

Pipeline per submit():
1. Build a fresh SubmissionEnvelope (ids, timestamp, payload, metadata)
2. Local mode → save a file via LocalDelivery
3. Server mode → POST via RemoteDelivery
   a. Success → return the server result
   b. Any failure → fall back to LocalDelivery with the same envelope when
      fallback is enabled, otherwise re-raise the original error

Environment mode is detected once at construction and never re-checked.
"""
import logging
import platform
import sys
from typing import Any, Dict, Mapping, Optional, Union

from trialsink.adapters.storage_directory import DirectorySink
from trialsink.adapters.transport_httpx import HttpxTransport
from trialsink.core.config import settings
from trialsink.core.environment import EnvironmentMode, Location, detect_environment
from trialsink.core.errors import ConfigurationError
from trialsink.ports.runner import REQUIRED_RUNNER_METHODS
from trialsink.ports.storage import PersistenceSink
from trialsink.ports.transport import TransportClient
from trialsink.schemas.submission import (
    CompleteSubmissionOptions,
    DeliveryOptions,
    DeliveryResult,
    EnvironmentInfo,
    SubmissionEnvelope,
    utc_timestamp,
)
from trialsink.services.local_delivery import LocalDelivery
from trialsink.services.remote_delivery import RemoteDelivery

logger = logging.getLogger(__name__)

OptionsLike = Union[DeliveryOptions, Mapping[str, Any], None]
CompleteOptionsLike = Union[CompleteSubmissionOptions, Mapping[str, Any], None]


def client_identifier() -> str:
    """e.g. "trialsink/0.1.0 (Python 3.12.1; linux)" """
    return f"{settings.PROJECT_NAME}/{settings.VERSION} (Python {platform.python_version()}; {sys.platform})"


def validate_runner(runner: Any) -> None:
    """Raise ConfigurationError unless the runner exposes every required callable."""
    if runner is None:
        raise ConfigurationError(
            "A runner instance is required. Pass the experiment runner as the first argument."
        )

    missing = [name for name in REQUIRED_RUNNER_METHODS if not callable(getattr(runner, name, None))]
    if missing:
        raise ConfigurationError(
            f"Invalid runner: missing {', '.join(missing)}. Make sure the runner is properly initialized."
        )


def coerce_options(options: OptionsLike) -> DeliveryOptions:
    if options is None:
        return DeliveryOptions()
    if isinstance(options, DeliveryOptions):
        return options
    return DeliveryOptions.model_validate(dict(options))


def coerce_complete_options(options: CompleteOptionsLike) -> CompleteSubmissionOptions:
    if options is None:
        return CompleteSubmissionOptions()
    if isinstance(options, CompleteSubmissionOptions):
        return options
    return CompleteSubmissionOptions.model_validate(dict(options))


class TrialDataHandler:
    """
    Submits trial data to the server or saves it locally.

    Capabilities are injected: a runner (required), a transport (defaults to
    HttpxTransport) and a sink (defaults to DirectorySink(settings.DOWNLOAD_DIR)).
    """

    def __init__(
        self,
        runner: Any,
        transport: Optional[TransportClient] = None,
        sink: Optional[PersistenceSink] = None,
        *,
        server_url: Optional[str] = None,
        experiment_name: Optional[str] = None,
        participant_id: Optional[str] = None,
        fallback_to_local: Optional[bool] = None,
        location: Optional[Location] = None,
    ):
        """
        Initialize handler.

        Args:
            runner: Host experiment runner (random_id, records, total_time)
            transport: Transport for remote delivery
            sink: Sink for local delivery
            server_url: Collection server base URL (defaults to settings.SERVER_URL)
            experiment_name: Experiment name (defaults to settings.EXPERIMENT_NAME)
            participant_id: Participant id (defaults to runner.random_id())
            fallback_to_local: Save locally when the server fails (defaults to settings)
            location: Page location (defaults to Location.from_url(settings.PAGE_URL))

        Raises:
            ConfigurationError: If the runner is missing or malformed
        """
        validate_runner(runner)
        self.runner = runner

        self.server_url = (server_url or settings.SERVER_URL).rstrip("/")
        self.experiment_name = experiment_name or settings.EXPERIMENT_NAME
        self.participant_id = participant_id or runner.random_id()
        self.fallback_to_local = (
            settings.FALLBACK_TO_LOCAL if fallback_to_local is None else fallback_to_local
        )

        self.location = location if location is not None else Location.from_url(settings.PAGE_URL)
        self.mode = detect_environment(self.location)
        self.user_agent = client_identifier()

        self.remote = RemoteDelivery(transport or HttpxTransport(), self.server_url)
        self.local = LocalDelivery(sink or DirectorySink(settings.DOWNLOAD_DIR))

        logger.info(f"Mode: {self.mode.value.upper()}")
        logger.info(f"Participant ID: {self.participant_id}")

    @property
    def is_local(self) -> bool:
        return self.mode == EnvironmentMode.LOCAL

    def build_envelope(
        self,
        payload: Any,
        metadata: Optional[Mapping[str, Any]] = None,
        timestamp: Optional[str] = None,
    ) -> SubmissionEnvelope:
        return SubmissionEnvelope.build(
            participant_id=self.participant_id,
            experiment_name=self.experiment_name,
            data=payload,
            environment=self.mode,
            user_agent=self.user_agent,
            metadata=metadata,
            timestamp=timestamp,
        )

    async def _save_locally(
        self, envelope: SubmissionEnvelope, options: DeliveryOptions, timestamp: str
    ) -> DeliveryResult:
        return await self.local.save(
            envelope,
            options,
            experiment_name=self.experiment_name,
            participant_id=self.participant_id,
            timestamp=timestamp,
        )

    async def submit(self, payload: Any, options: OptionsLike = None) -> DeliveryResult:
        """
        Submit trial data, choosing server or local delivery automatically.

        Args:
            payload: Trial record(s), any JSON-compatible value
            options: DeliveryOptions or a dict of its fields

        Returns:
            DeliveryResult from whichever path delivered the data

        Raises:
            DeliveryError: Local save failed
            ValidationError: Unknown option key or invalid option value
            Exception: Server delivery failed and fallback is disabled (re-raised as is)
        """
        options = coerce_options(options)
        timestamp = utc_timestamp()
        envelope = self.build_envelope(payload, options.metadata, timestamp)

        if self.is_local:
            return await self._save_locally(envelope, options, timestamp)

        try:
            return await self.remote.post(envelope, options)
        except Exception as e:
            logger.warning(f"Server upload failed: {e}")

            if not self.fallback_to_local:
                raise

            logger.info("Falling back to local download...")
            return await self._save_locally(envelope, options, timestamp)

    async def submit_all(self, options: CompleteOptionsLike = None) -> DeliveryResult:
        """
        Submit every record the runner has accumulated (typically at the end).

        Adds submission_type, total_trials and completion_time to the metadata;
        caller metadata wins on conflicts.

        Args:
            options: CompleteSubmissionOptions or a dict of its fields (format, filename, metadata)
        """
        options = coerce_complete_options(options)
        records = self.runner.records()

        merged: Dict[str, Any] = {
            "submission_type": "complete_experiment",
            "total_trials": len(records),
            "completion_time": self.runner.total_time(),
        }
        merged.update(options.metadata)

        options = DeliveryOptions(
            endpoint=settings.COMPLETE_ENDPOINT,
            file_type=options.format,
            filename=options.filename,
            metadata=merged,
        )

        try:
            return await self.submit(records, options)
        except Exception as e:
            logger.error(f"Failed to submit complete data: {e}")
            raise

    def environment_info(self) -> EnvironmentInfo:
        """Current mode, server URL, participant id, raw location and fallback flag."""
        return EnvironmentInfo(
            is_local=self.is_local,
            mode=self.mode,
            server_url=self.server_url,
            participant_id=self.participant_id,
            protocol=self.location.protocol,
            hostname=self.location.hostname,
            fallback_enabled=self.fallback_to_local,
        )
