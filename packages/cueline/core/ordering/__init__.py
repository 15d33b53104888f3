"""Ordering engine - canonical order, moves and inserts for track items.

Items live on tracks; items that resolve to the same position form a
group. The functions here take a snapshot of the collection and return a
new snapshot; none of them mutate their input.
"""

from cueline.core.ordering.errors import ConflictError
from cueline.core.ordering.insert import append_item, insert_item
from cueline.core.ordering.models import ItemGroup, OrderedItem, Placement
from cueline.core.ordering.move import move_item
from cueline.core.ordering.order import (
    compute_order,
    flatten,
    group_index_of,
    reindex,
    resolve_destination,
)
from cueline.core.ordering.tracks import is_track_head, is_track_tail, track_sequences

__all__ = [
    "ConflictError",
    "ItemGroup",
    "OrderedItem",
    "Placement",
    "append_item",
    "compute_order",
    "flatten",
    "group_index_of",
    "insert_item",
    "is_track_head",
    "is_track_tail",
    "move_item",
    "reindex",
    "resolve_destination",
    "track_sequences",
]
