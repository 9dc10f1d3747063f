"""Submit snapshot rendering jobs to a remote browser service."""

from snapfleet.errors import (
    ConflictingTargetOption,
    InvalidViewport,
    MissingWorkload,
    OperationCancelled,
    PollError,
    PollTimeout,
    SnapfleetError,
    SubmissionError,
    TargetConfigError,
    TransportError,
    ViewportTooNarrow,
)
from snapfleet.jobs import RemoteBrowserTarget, ResultPoller
from snapfleet.models import JobInputs, SnapResult, TargetConfig
from snapfleet.remote import ContentHasher, RequestTransport

__version__ = "0.1.0"

__all__ = [
    "ConflictingTargetOption",
    "InvalidViewport",
    "MissingWorkload",
    "OperationCancelled",
    "PollError",
    "PollTimeout",
    "SnapfleetError",
    "SubmissionError",
    "TargetConfigError",
    "TransportError",
    "ViewportTooNarrow",
    "RemoteBrowserTarget",
    "ResultPoller",
    "JobInputs",
    "SnapResult",
    "TargetConfig",
    "ContentHasher",
    "RequestTransport",
]
