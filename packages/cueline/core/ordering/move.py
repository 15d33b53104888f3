"""Relocating an item to another group.

Moving an item across groups slides it along its own track. Every
same-track item it slides past is displaced into a solitary group of its
own, so a track never holds two items at one position. Items on other
tracks stay where they are.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Sequence
import logging

from cueline.core.config.models import OrderingConfig
from cueline.core.ordering.models import ItemGroup, OrderedItem, Placement
from cueline.core.ordering.order import (
    compute_order,
    flatten,
    group_index_of,
    reindex,
    resolve_destination,
)

logger = logging.getLogger(__name__)


def move_item(
    items: Sequence[OrderedItem],
    target_id: str,
    destination: int,
    placement: Placement | str = Placement.AT,
    *,
    config: OrderingConfig | None = None,
) -> list[OrderedItem]:
    """Move an item to (``at``) or right after (``after``) a destination group.

    The returned collection is reindexed and always passes
    ``compute_order``. The caller's items are never mutated.

    Args:
        items: Current collection.
        target_id: Id of the item to move.
        destination: Group index in the current canonical order. With
            ``after``, -1 means "before the first group".
        placement: ``at`` joins the destination group; ``after`` creates a
            new solitary group right after it.
        config: Engine config (destination policy).

    Returns:
        The new collection. When there is nothing to do (fewer than two
        items, unknown ``target_id``, or ``at`` the target's own group) the
        input items are returned as they are.

    Raises:
        ConflictError: If the input collection itself conflicts, even when
            ``target_id`` is unknown.
        IndexError: If ``destination`` is out of range under the strict
            destination policy.
        ValueError: If ``placement`` is not a valid placement.

    Example:
        >>> # a0, a1, a2 on track A at 0, 1, 2
        >>> moved = move_item([a0, a1, a2], "a0", 2, "at")
        >>> [[i.id for i in g] for g in compute_order(moved)]
        [['a1'], ['a2'], ['a0']]
    """
    placement = Placement(placement)

    if len(items) < 2:
        logger.debug("Move of %s skipped: fewer than two items", target_id)
        return list(items)

    groups = compute_order(items)
    old_index = group_index_of(groups, target_id)
    if old_index is None:
        # A drag can race with the host deleting the item
        logger.debug("Move skipped: %s not found", target_id)
        return list(items)

    lower = -1 if placement == Placement.AFTER else 0
    destination = resolve_destination(destination, lower, len(groups) - 1, config)

    if placement == Placement.AT and old_index == destination:
        logger.debug("Move of %s skipped: already at group %d", target_id, destination)
        return list(items)

    target = next(item for item in groups[old_index] if item.id == target_id)
    if old_index <= destination:
        new_groups, displaced = _move_forward(groups, target, old_index, destination, placement)
    else:
        new_groups, displaced = _move_backward(groups, target, old_index, destination, placement)

    logger.debug(
        "Moved %s from group %d %s group %d, displaced %s",
        target_id,
        old_index,
        placement.value,
        destination,
        [item.id for item in displaced] or "nothing",
    )

    reindex(new_groups)
    return flatten(new_groups)


def _split_track(group: ItemGroup, track_id: str) -> tuple[ItemGroup, list[OrderedItem]]:
    """Split a group into (items on other tracks, items on ``track_id``)."""
    kept: ItemGroup = []
    on_track: list[OrderedItem] = []
    for item in group:
        (on_track if item.track_id == track_id else kept).append(item)
    return kept, on_track


def _move_forward(
    groups: list[ItemGroup],
    target: OrderedItem,
    old_index: int,
    destination: int,
    placement: Placement,
) -> tuple[list[ItemGroup], list[OrderedItem]]:
    """Slide ``target`` towards later groups.

    Displaced items end up in front of the target, in their original order,
    so the target is always the last of the moved items.
    """
    result: list[ItemGroup] = [list(group) for group in groups[:old_index]]
    result.append([item for item in groups[old_index] if item.id != target.id])

    displaced: list[OrderedItem] = []
    for group in groups[old_index + 1 : destination + 1]:
        kept, on_track = _split_track(group, target.track_id)
        displaced.extend(on_track)
        result.append(kept)

    if placement == Placement.AT:
        destination_group = result.pop()
        result.extend([item] for item in displaced)
        result.append(destination_group + [target])
    else:
        result.extend([item] for item in displaced)
        result.append([target])

    result.extend(list(group) for group in groups[destination + 1 :])
    return result, displaced


def _move_backward(
    groups: list[ItemGroup],
    target: OrderedItem,
    old_index: int,
    destination: int,
    placement: Placement,
) -> tuple[list[ItemGroup], list[OrderedItem]]:
    """Slide ``target`` towards earlier groups.

    Mirror of ``_move_forward``: the affected range is walked from its end
    to its front, and displaced items end up behind the target.
    """
    start = destination if placement == Placement.AT else destination + 1

    traversed: deque[ItemGroup] = deque()
    displaced: deque[OrderedItem] = deque()
    for index in range(old_index - 1, start - 1, -1):
        kept, on_track = _split_track(groups[index], target.track_id)
        displaced.extendleft(reversed(on_track))
        traversed.appendleft(kept)

    result: list[ItemGroup] = [list(group) for group in groups[:start]]
    if placement == Placement.AT:
        result.append(traversed.popleft() + [target])
    else:
        result.append([target])
    result.extend([item] for item in displaced)
    result.extend(traversed)

    result.append([item for item in groups[old_index] if item.id != target.id])
    result.extend(list(group) for group in groups[old_index + 1 :])
    return result, list(displaced)


__all__ = ["move_item"]
