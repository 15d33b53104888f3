"""Per-track views over the canonical order."""

from __future__ import annotations

from collections.abc import Sequence

from cueline.core.ordering.models import OrderedItem
from cueline.core.ordering.order import compute_order, flatten, reindex


def track_sequences(items: Sequence[OrderedItem]) -> dict[str, list[OrderedItem]]:
    """Split the canonical order into one sequence per track.

    Items are reindexed copies, so ``global_index`` is each item's group
    rank in the whole timeline. Tracks appear in the order their first
    item does.

    Raises:
        ConflictError: If the collection conflicts.
    """
    groups = compute_order(items)
    reindex(groups)

    sequences: dict[str, list[OrderedItem]] = {}
    for item in flatten(groups):
        sequences.setdefault(item.track_id, []).append(item)
    return sequences


def _track_of(items: Sequence[OrderedItem], item_id: str) -> str:
    for item in items:
        if item.id == item_id:
            return item.track_id
    raise KeyError(item_id)


def is_track_head(items: Sequence[OrderedItem], item_id: str) -> bool:
    """Whether ``item_id`` is the first item on its track."""
    track_id = _track_of(items, item_id)
    return track_sequences(items)[track_id][0].id == item_id


def is_track_tail(items: Sequence[OrderedItem], item_id: str) -> bool:
    """Whether ``item_id`` is the last item on its track."""
    track_id = _track_of(items, item_id)
    return track_sequences(items)[track_id][-1].id == item_id


__all__ = ["is_track_head", "is_track_tail", "track_sequences"]
