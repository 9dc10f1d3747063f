"""Tests for chunk planning."""

import pytest

from snapfleet.jobs import ChunkPlanner
from snapfleet.models import Pages, SnapPayloads, StaticPackage


def test_uneven_split() -> None:
    """Test 10 items in 3 chunks give slices of 4, 4 and 2."""
    items = [{"name": str(i)} for i in range(10)]
    chunks = ChunkPlanner(3).plan(SnapPayloads(snap_payloads=items))

    assert [len(chunk.items) for chunk in chunks] == [4, 4, 2]
    assert [item for chunk in chunks for item in chunk.items] == items
    assert [chunk.index for chunk in chunks] == [0, 1, 2]
    assert all(chunk.total == 3 for chunk in chunks)


def test_empty_workload_still_produces_all_chunks() -> None:
    """Test 0 items in 3 chunks give 3 empty chunks."""
    chunks = ChunkPlanner(3).plan(SnapPayloads(snap_payloads=[]))

    assert len(chunks) == 3
    assert all(chunk.items == [] for chunk in chunks)


def test_more_chunks_than_items() -> None:
    """Test trailing chunks are empty when chunks outnumber items."""
    pages = [{"url": "/a"}, {"url": "/b"}]
    chunks = ChunkPlanner(4).plan(Pages(pages=pages))

    assert [chunk.items for chunk in chunks] == [[{"url": "/a"}], [{"url": "/b"}], [], []]
    assert all(chunk.kind == "pages" for chunk in chunks)


def test_static_package_chunks_by_index() -> None:
    """Test static packages get index-only chunks."""
    chunks = ChunkPlanner(3).plan(StaticPackage())

    assert [(chunk.index, chunk.total) for chunk in chunks] == [(0, 3), (1, 3), (2, 3)]
    assert all(chunk.items is None and chunk.is_static for chunk in chunks)


def test_single_chunk() -> None:
    """Test the default of one chunk keeps the whole list."""
    items = [{"name": "a"}, {"name": "b"}]
    (chunk,) = ChunkPlanner().plan(SnapPayloads(snap_payloads=items))

    assert chunk.items == items


def test_invalid_chunk_count() -> None:
    """Test chunk count must be positive."""
    with pytest.raises(ValueError):
        ChunkPlanner(0)
