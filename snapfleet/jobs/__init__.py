"""Job planning, submission and polling."""

from snapfleet.jobs.planner import Chunk, ChunkPlanner
from snapfleet.jobs.poller import ResultPoller
from snapfleet.jobs.submitter import JobSubmitter, build_payload, serialize_payload
from snapfleet.jobs.target import RemoteBrowserTarget, gather_results

__all__ = [
    "Chunk",
    "ChunkPlanner",
    "ResultPoller",
    "JobSubmitter",
    "build_payload",
    "serialize_payload",
    "RemoteBrowserTarget",
    "gather_results",
]
