"""Splitting a workload into chunks."""

import math
from dataclasses import dataclass
from typing import Any

from snapfleet.models import Pages, SnapPayloads, StaticPackage


@dataclass
class Chunk:
    """One slice of the workload, submitted as a single snap request."""

    index: int
    total: int
    kind: str
    items: list[dict[str, Any]] | None = None

    @property
    def is_static(self) -> bool:
        return self.kind == "static"


class ChunkPlanner:
    """
    Split a workload into a fixed number of chunks.

    Static packages are chunked by index only. Lists are cut into contiguous
    slices of ``ceil(len / chunks)`` items; trailing chunks may be short or
    empty but the requested chunk count is always produced.
    """

    def __init__(self, chunks: int = 1) -> None:
        if chunks < 1:
            raise ValueError(f"chunks must be a positive integer, got {chunks}")
        self.chunks = chunks

    def plan(self, workload: StaticPackage | Pages | SnapPayloads) -> list[Chunk]:
        if isinstance(workload, StaticPackage):
            return [
                Chunk(index=i, total=self.chunks, kind=workload.kind)
                for i in range(self.chunks)
            ]

        items = workload.pages if isinstance(workload, Pages) else workload.snap_payloads
        per_chunk = math.ceil(len(items) / self.chunks)
        return [
            Chunk(
                index=i,
                total=self.chunks,
                kind=workload.kind,
                items=items[i * per_chunk : (i + 1) * per_chunk],
            )
            for i in range(self.chunks)
        ]
