"""Adding new items as solitary groups."""

from __future__ import annotations

from collections.abc import Sequence
import logging

from cueline.core.config.models import OrderingConfig
from cueline.core.ordering.errors import ConflictError
from cueline.core.ordering.models import OrderedItem
from cueline.core.ordering.order import compute_order, flatten, reindex, resolve_destination

logger = logging.getLogger(__name__)


def insert_item(
    items: Sequence[OrderedItem],
    new_item: OrderedItem,
    destination: int,
    *,
    config: OrderingConfig | None = None,
) -> list[OrderedItem]:
    """Insert ``new_item`` as a new solitary group at ``destination``.

    The group currently at ``destination`` and everything after it shift
    one position later. ``new_item.global_index`` is ignored and rewritten.

    Args:
        items: Current collection.
        new_item: Item to add. Its id must not already be in ``items``.
        destination: Group index for the new group. Past the end appends.
        config: Engine config (destination policy).

    Returns:
        The new, reindexed collection.

    Raises:
        ConflictError: If the collection conflicts or ``new_item.id`` is
            already taken.
        IndexError: If ``destination`` is out of range under the strict
            destination policy.
    """
    if any(item.id == new_item.id for item in items):
        raise ConflictError("duplicate item id", item_ids=(new_item.id,))

    groups = compute_order(items)
    destination = resolve_destination(destination, 0, len(groups), config)

    groups.insert(destination, [new_item.model_copy()])
    logger.debug("Inserted %s as group %d of %d", new_item.id, destination, len(groups))

    reindex(groups)
    return flatten(groups)


def append_item(
    items: Sequence[OrderedItem],
    new_item: OrderedItem,
) -> list[OrderedItem]:
    """Add ``new_item`` as the new last group."""
    if any(item.id == new_item.id for item in items):
        raise ConflictError("duplicate item id", item_ids=(new_item.id,))

    groups = compute_order(items)
    groups.append([new_item.model_copy()])

    reindex(groups)
    return flatten(groups)


__all__ = ["append_item", "insert_item"]
