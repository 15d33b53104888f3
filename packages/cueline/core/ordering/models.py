"""Data models for the ordering engine.

An ``OrderedItem`` is a cue point placed on a track. Items that resolve to
the same position form an ``ItemGroup`` (a frame); the ordered list of
groups is what the host plays back step by step.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

DataT = TypeVar("DataT")


class Placement(str, Enum):
    """Where a moved item lands relative to the destination group."""

    AT = "at"  # Join the destination group
    AFTER = "after"  # New solitary group right after the destination group


class OrderedItem(BaseModel, Generic[DataT]):
    """A single item on a track.

    The engine only reads ``id``, ``track_id`` and ``global_index``; the
    payload in ``data`` is carried through untouched.

    Attributes:
        id: Unique identifier across the collection.
        global_index: Ordering hint. Items on different tracks with equal
            values are simultaneous. Rewritten to a dense rank whenever the
            engine re-places items.
        track_id: Track (lane) the item belongs to.
        data: Opaque host payload.

    Example:
        >>> item = OrderedItem(id="k1", global_index=0, track_id="A", data={})
        >>> item.to_json_object()
        {'id': 'k1', 'globalIndex': 0, 'trackId': 'A', 'data': {}}
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    id: str = Field(min_length=1, description="Unique item identifier")
    global_index: int = Field(alias="globalIndex", description="Ordering hint")
    track_id: str = Field(alias="trackId", description="Owning track")
    data: DataT = Field(description="Opaque host payload")

    def to_json_object(self) -> dict[str, Any]:
        """Dump to the camelCase record layout hosts store alongside shapes."""
        return self.model_dump(mode="json", by_alias=True)


# Items sharing one resolved position; at most one item per track.
ItemGroup = list[OrderedItem]


__all__ = [
    "DataT",
    "ItemGroup",
    "OrderedItem",
    "Placement",
]
