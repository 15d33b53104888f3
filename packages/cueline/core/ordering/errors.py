"""Errors raised by the ordering engine."""

from __future__ import annotations


class ConflictError(Exception):
    """Raised when a collection cannot be put into a consistent order.

    Covers two items on the same track at the same position, duplicate
    item ids, and a precedence relation that cannot be fully resolved.
    There is no partial result: callers either prevent the condition or
    catch this.

    Attributes:
        reason: What specifically went wrong.
        item_ids: Ids of the items involved (may be empty).
        track_id: Track of the colliding items, when applicable.
        global_index: Shared position of the colliding items, when applicable.
    """

    def __init__(
        self,
        reason: str,
        *,
        item_ids: tuple[str, ...] = (),
        track_id: str | None = None,
        global_index: int | None = None,
    ) -> None:
        self.reason = reason
        self.item_ids = item_ids
        self.track_id = track_id
        self.global_index = global_index
        parts = [f"Cycle or conflict: {reason}"]
        if item_ids:
            parts.append(f"items={', '.join(item_ids)}")
        if track_id is not None:
            parts.append(f"track={track_id}")
        if global_index is not None:
            parts.append(f"index={global_index}")
        super().__init__(" | ".join(parts))


__all__ = ["ConflictError"]
