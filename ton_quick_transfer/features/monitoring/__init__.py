"""Submission and confirmation tracking for TON Quick Transfer."""

from ton_quick_transfer.features.monitoring.service import (
    OutcomeStatus,
    SubmissionOutcome,
    SubmissionState,
    SubmissionTracker,
)

__all__ = [
    "SubmissionTracker",
    "SubmissionState",
    "SubmissionOutcome",
    "OutcomeStatus",
]
