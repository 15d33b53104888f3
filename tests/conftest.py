"""Shared pytest fixtures for cueline tests."""

from __future__ import annotations

import pytest

from cueline.core.ordering import OrderedItem

# ============================================================================
# Item Builders
# ============================================================================


def make_item(item_id: str, global_index: int, track_id: str) -> OrderedItem:
    """Build an item with an empty payload; payloads play no part in ordering."""
    return OrderedItem(id=item_id, global_index=global_index, track_id=track_id, data={})


@pytest.fixture
def single_track_items() -> list[OrderedItem]:
    """Three items on track A at 0, 1, 2."""
    return [make_item("k1", 0, "A"), make_item("k2", 1, "A"), make_item("k3", 2, "A")]


@pytest.fixture
def two_track_items() -> list[OrderedItem]:
    """Two interleaved tracks.

    group0 => [a0, b0], group1 => [a1], group2 => [b1], group3 => [a2, b2]
    """
    return [
        make_item("a0", 0, "A"),
        make_item("b0", 0, "B"),
        make_item("a1", 1, "A"),
        make_item("b1", 2, "B"),
        make_item("a2", 3, "A"),
        make_item("b2", 3, "B"),
    ]
