"""Canonical ordering of track items.

Turns a flat collection of ``OrderedItem`` into an ordered list of groups
(frames) and normalizes sparse ``global_index`` values into dense ranks.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Sequence
import logging

from cueline.core.config.models import DestinationPolicy, OrderingConfig
from cueline.core.ordering.errors import ConflictError
from cueline.core.ordering.models import ItemGroup, OrderedItem

logger = logging.getLogger(__name__)


def compute_order(items: Iterable[OrderedItem]) -> list[ItemGroup]:
    """Compute the canonical group sequence for a collection.

    The input is never mutated; returned groups hold copies. Group
    membership and group order depend only on the (id, track_id,
    global_index) triples. Within a group, items keep their relative
    input order.

    Args:
        items: Items to order.

    Returns:
        Groups in playback order. Each group holds the items sharing one
        ``global_index``, at most one per track.

    Raises:
        ConflictError: If ids are duplicated, two items on the same track
            share a ``global_index``, or the precedence relation cannot be
            fully resolved.

    Example:
        >>> groups = compute_order([a0, b0, a1])
        >>> [[item.id for item in group] for group in groups]
        [['a0', 'b0'], ['a1']]
    """
    ordered = sorted((item.model_copy() for item in items), key=lambda i: i.global_index)

    _check_conflicts(ordered)

    successors = _build_precedence(ordered)
    topo = _topological_order(successors)
    if len(topo) < len(ordered):
        emitted = set(topo)
        unresolved = tuple(item.id for rank, item in enumerate(ordered) if rank not in emitted)
        raise ConflictError("precedence relation could not be resolved", item_ids=unresolved)

    groups: list[ItemGroup] = []
    current_index: int | None = None
    for rank in topo:
        item = ordered[rank]
        if not groups or item.global_index != current_index:
            groups.append([])
            current_index = item.global_index
        groups[-1].append(item)

    logger.debug("Ordered %d items into %d groups", len(ordered), len(groups))
    return groups


def _check_conflicts(ordered: Sequence[OrderedItem]) -> None:
    """Reject duplicate ids and same-track items sharing a position."""
    seen_ids: set[str] = set()
    occupied: dict[tuple[str, int], str] = {}
    for item in ordered:
        if item.id in seen_ids:
            raise ConflictError("duplicate item id", item_ids=(item.id,))
        seen_ids.add(item.id)

        slot = (item.track_id, item.global_index)
        other = occupied.get(slot)
        if other is not None:
            raise ConflictError(
                "same track and global index",
                item_ids=(other, item.id),
                track_id=item.track_id,
                global_index=item.global_index,
            )
        occupied[slot] = item.id


def _build_precedence(ordered: Sequence[OrderedItem]) -> list[list[int]]:
    """Build the "a precedes b" relation as adjacency lists keyed by sorted rank.

    ``ordered`` must be sorted by ``global_index``. Only runs of equal keys
    that are adjacent in the sort are linked; the remaining pairs follow
    by transitivity.
    """
    successors: list[list[int]] = [[] for _ in ordered]

    runs: list[range] = []
    start = 0
    for rank in range(1, len(ordered) + 1):
        if rank == len(ordered) or ordered[rank].global_index != ordered[start].global_index:
            runs.append(range(start, rank))
            start = rank

    for run, next_run in zip(runs, runs[1:]):
        for rank in run:
            successors[rank].extend(next_run)
    return successors


def _topological_order(successors: Sequence[Sequence[int]]) -> list[int]:
    """Kahn's algorithm; returns fewer ranks than nodes if a cycle remains."""
    indegree = [0] * len(successors)
    for targets in successors:
        for target in targets:
            indegree[target] += 1

    queue = deque(rank for rank, degree in enumerate(indegree) if degree == 0)
    topo: list[int] = []
    while queue:
        rank = queue.popleft()
        topo.append(rank)
        for target in successors[rank]:
            indegree[target] -= 1
            if indegree[target] == 0:
                queue.append(target)
    return topo


def reindex(groups: Sequence[ItemGroup]) -> None:
    """Rewrite every item's ``global_index`` to its group's rank, in place.

    Empty groups are skipped and do not consume a rank.
    """
    rank = 0
    for group in groups:
        if not group:
            continue
        for item in group:
            item.global_index = rank
        rank += 1


def flatten(groups: Iterable[ItemGroup]) -> list[OrderedItem]:
    """Concatenate groups in order."""
    return [item for group in groups for item in group]


def group_index_of(groups: Sequence[ItemGroup], item_id: str) -> int | None:
    """Return the index of the group holding ``item_id``, or None."""
    for index, group in enumerate(groups):
        if any(item.id == item_id for item in group):
            return index
    return None


def resolve_destination(
    destination: int,
    lower: int,
    upper: int,
    config: OrderingConfig | None = None,
) -> int:
    """Bring a destination group index into ``[lower, upper]``.

    Args:
        destination: Requested group index.
        lower: Smallest valid index.
        upper: Largest valid index.
        config: Engine config; its destination policy decides between
            clamping and raising.

    Returns:
        The destination, clamped if needed.

    Raises:
        IndexError: If out of range under the strict policy.
    """
    if lower <= destination <= upper:
        return destination

    policy = (config or OrderingConfig()).destination_policy
    if policy == DestinationPolicy.STRICT:
        raise IndexError(f"Destination group {destination} outside [{lower}, {upper}]")

    clamped = min(max(destination, lower), upper)
    logger.debug("Clamped destination group %d to %d", destination, clamped)
    return clamped


__all__ = [
    "compute_order",
    "flatten",
    "group_index_of",
    "reindex",
    "resolve_destination",
]
