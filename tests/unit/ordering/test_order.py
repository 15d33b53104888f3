"""Tests for canonical order computation."""

from __future__ import annotations

import itertools

import pytest

from cueline.core.config.models import DestinationPolicy, OrderingConfig
from cueline.core.ordering import ConflictError, OrderedItem, compute_order, flatten
from cueline.core.ordering.order import group_index_of, resolve_destination


def _item(item_id: str, global_index: int, track_id: str) -> OrderedItem:
    return OrderedItem(id=item_id, global_index=global_index, track_id=track_id, data={})


def _ids(groups: list[list[OrderedItem]]) -> list[list[str]]:
    return [[item.id for item in group] for group in groups]


class TestComputeOrder:
    """Tests for compute_order grouping and ordering."""

    def test_empty_input(self):
        """Empty input yields no groups."""
        assert compute_order([]) == []

    def test_single_item(self):
        """A single item keeps its own global_index."""
        groups = compute_order([_item("k1", 10, "A")])

        assert len(groups) == 1
        assert groups[0][0].id == "k1"
        assert groups[0][0].global_index == 10

    def test_distinct_indices_make_separate_groups(self):
        """Each distinct global_index becomes its own group, ascending."""
        items = [_item("k1", 0, "A"), _item("k2", 5, "A"), _item("k3", 2, "B")]

        assert _ids(compute_order(items)) == [["k1"], ["k3"], ["k2"]]

    def test_equal_indices_on_distinct_tracks_share_group(self):
        """Items on different tracks at one index are simultaneous."""
        items = [_item("k1", 0, "A"), _item("k2", 0, "B")]

        groups = compute_order(items)

        assert len(groups) == 1
        assert {item.id for item in groups[0]} == {"k1", "k2"}

    def test_mixed_groups(self):
        """Shared and solitary groups interleave correctly."""
        items = [_item("k1", 0, "A"), _item("k2", 0, "B"), _item("k3", 1, "A")]

        groups = compute_order(items)

        assert [len(group) for group in groups] == [2, 1]
        assert groups[1][0].id == "k3"

    def test_multiple_tracks_interleaved(self):
        """Two tracks with alternating indices produce four groups."""
        items = [
            _item("k1", 1, "A"),
            _item("k2", 3, "A"),
            _item("k3", 0, "B"),
            _item("k4", 2, "B"),
        ]

        assert _ids(compute_order(items)) == [["k3"], ["k1"], ["k4"], ["k2"]]

    def test_sparse_and_negative_indices(self):
        """Gaps and negative values only matter through their order."""
        items = [_item("k1", 100, "A"), _item("k2", -5, "A"), _item("k3", 101, "B")]

        assert _ids(compute_order(items)) == [["k2"], ["k1"], ["k3"]]

    def test_within_group_keeps_input_order(self):
        """Stable sort: members of a group keep their relative input order."""
        items = [_item("b", 0, "B"), _item("a", 0, "A"), _item("c", 0, "C")]

        assert _ids(compute_order(items)) == [["b", "a", "c"]]

    def test_does_not_mutate_input(self):
        """Returned groups hold copies of the input items."""
        items = [_item("k1", 7, "A"), _item("k2", 9, "A")]

        groups = compute_order(items)
        groups[0][0].global_index = 0

        assert items[0].global_index == 7
        assert groups[0][0] is not items[0]

    def test_flatten_preserves_all_items(self, two_track_items):
        """Flattening the groups yields every input item exactly once."""
        flat = flatten(compute_order(two_track_items))

        assert len(flat) == len(two_track_items)
        assert {item.id for item in flat} == {item.id for item in two_track_items}

    def test_permutation_invariance(self, two_track_items):
        """Group membership and group order ignore input order."""
        expected = [
            {item.id for item in group} for group in compute_order(two_track_items)
        ]

        for permutation in itertools.permutations(two_track_items):
            groups = compute_order(list(permutation))
            assert [{item.id for item in group} for group in groups] == expected

    def test_groups_hold_one_item_per_track(self, two_track_items):
        """No group contains two items of the same track."""
        for group in compute_order(two_track_items):
            tracks = [item.track_id for item in group]
            assert len(tracks) == len(set(tracks))

    def test_accepts_generator(self):
        """Any iterable of items is accepted."""
        groups = compute_order(_item(f"k{i}", i, "A") for i in range(3))

        assert _ids(groups) == [["k0"], ["k1"], ["k2"]]


class TestConflicts:
    """Tests for conflict detection."""

    def test_same_track_same_index(self):
        """Two items on one track at one index conflict."""
        items = [_item("k1", 2, "A"), _item("k2", 2, "A")]

        with pytest.raises(ConflictError, match="Cycle or conflict"):
            compute_order(items)

    def test_conflict_not_adjacent_in_input(self):
        """Conflict is detected with an unrelated item between the pair."""
        items = [_item("k1", 2, "A"), _item("k3", 3, "B"), _item("k2", 2, "A")]

        with pytest.raises(ConflictError, match="Cycle or conflict"):
            compute_order(items)

    def test_conflict_with_interleaved_simultaneous_item(self):
        """An item on another track at the same index does not hide the conflict."""
        items = [_item("k1", 2, "A"), _item("x", 2, "B"), _item("k2", 2, "A")]

        with pytest.raises(ConflictError):
            compute_order(items)

    def test_conflict_carries_context(self):
        """ConflictError exposes the colliding ids, track and index."""
        items = [_item("k1", 4, "A"), _item("k2", 4, "A")]

        with pytest.raises(ConflictError) as exc_info:
            compute_order(items)

        error = exc_info.value
        assert set(error.item_ids) == {"k1", "k2"}
        assert error.track_id == "A"
        assert error.global_index == 4

    def test_duplicate_ids(self):
        """Duplicate ids are rejected even on different tracks."""
        items = [_item("k1", 0, "A"), _item("k1", 1, "B")]

        with pytest.raises(ConflictError, match="duplicate item id"):
            compute_order(items)


class TestGroupIndexOf:
    """Tests for group_index_of."""

    def test_finds_group(self, two_track_items):
        """Returns the index of the group holding the item."""
        groups = compute_order(two_track_items)

        assert group_index_of(groups, "a0") == 0
        assert group_index_of(groups, "b1") == 2
        assert group_index_of(groups, "b2") == 3

    def test_missing_item(self, two_track_items):
        """Unknown ids give None."""
        assert group_index_of(compute_order(two_track_items), "nope") is None


class TestResolveDestination:
    """Tests for resolve_destination."""

    def test_in_range_unchanged(self):
        """Valid destinations pass through."""
        assert resolve_destination(2, 0, 3) == 2
        assert resolve_destination(-1, -1, 3) == -1

    @pytest.mark.parametrize(("destination", "expected"), [(-5, 0), (9, 3)])
    def test_clamped_by_default(self, destination, expected):
        """Out-of-range destinations are pulled to the nearest bound."""
        assert resolve_destination(destination, 0, 3) == expected

    def test_strict_policy_raises(self):
        """The strict policy rejects out-of-range destinations."""
        config = OrderingConfig(destination_policy=DestinationPolicy.STRICT)

        with pytest.raises(IndexError, match="outside"):
            resolve_destination(4, 0, 3, config)
