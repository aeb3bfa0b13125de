"""
Collection endpoints - receive trial submissions posted by TrialDataHandler.

Submissions are kept in an in-process store only; this is a reference
receiver for local deployments and end-to-end tests, not a database.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends

from trialsink.core.config import settings
from trialsink.schemas.submission import CollectorReceipt, TrialSubmission

logger = logging.getLogger(__name__)

router = APIRouter()


class SubmissionStore:
    """Append-only list of received submissions."""

    def __init__(self):
        self.items: List[TrialSubmission] = []

    def add(self, submission: TrialSubmission) -> int:
        self.items.append(submission)
        return len(self.items)

    def count(self) -> int:
        return len(self.items)


_store = SubmissionStore()


def get_store() -> SubmissionStore:
    return _store


def _receive(submission: TrialSubmission, store: SubmissionStore, endpoint: str) -> CollectorReceipt:
    received = store.add(submission)
    logger.info(f"Received submission for {submission.participant_id} on {endpoint} ({received} total)")
    return CollectorReceipt(
        status="ok",
        participant_id=submission.participant_id,
        received=received,
        endpoint=endpoint,
    )


@router.post("/trial", response_model=CollectorReceipt)
async def receive_trial(submission: TrialSubmission, store: SubmissionStore = Depends(get_store)):
    """Receive a single trial (or any per-call submission)."""
    return _receive(submission, store, f"{settings.API_PREFIX}/trial")


@router.post("/data", response_model=CollectorReceipt)
async def receive_complete_data(submission: TrialSubmission, store: SubmissionStore = Depends(get_store)):
    """Receive the complete experiment data set."""
    return _receive(submission, store, f"{settings.API_PREFIX}/data")


@router.get("/health")
async def health_check(store: SubmissionStore = Depends(get_store)):
    """Health check endpoint."""
    return {"status": "healthy", "received": store.count()}
