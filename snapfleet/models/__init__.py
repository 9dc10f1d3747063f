"""Data models for snapfleet."""

from snapfleet.models.result import RequestStatus, SnapRequestStatus, SnapResult
from snapfleet.models.target import MIN_EDGE_WIDTH, BrowserName, TargetConfig, parse_viewport
from snapfleet.models.workload import (
    JobInputs,
    Pages,
    SnapPayloads,
    StaticPackage,
    Workload,
    resolve_workload,
)

__all__ = [
    "MIN_EDGE_WIDTH",
    "BrowserName",
    "TargetConfig",
    "parse_viewport",
    "JobInputs",
    "Pages",
    "SnapPayloads",
    "StaticPackage",
    "Workload",
    "resolve_workload",
    "RequestStatus",
    "SnapRequestStatus",
    "SnapResult",
]
