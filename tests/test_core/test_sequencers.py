"""Tests for struct_diff.core.sequencers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import pytest

from struct_diff.core.differ import Differ
from struct_diff.core.errors import MaxDepthExceededError
from struct_diff.core.filtering import FacetFilter, FilterConfig
from struct_diff.core.models import MISSING, Operation, OperationName, SequenceKind
from struct_diff.core.registry import StrategyRegistry
from struct_diff.core.sequencers import (
    BUILTIN_SEQUENCERS,
    ROOT_KEY,
    MappingSequencer,
    ObjectSequencer,
    SequenceSequencer,
    SequencerContext,
    SetSequencer,
    values_equal,
)


@dataclass
class A:
    name: str
    age: int


@dataclass
class B:
    name: str
    age: int


@dataclass
class Address:
    city: str
    zip: int


@dataclass
class Person:
    name: str
    address: Address


class Link:
    """Plain object without __eq__, so distinct instances never compare equal."""

    def __init__(self, label: str) -> None:
        self.label = label
        self.next: Link | None = None


class OnlyPrivate:
    def __init__(self, value: int) -> None:
        self._value = value


class Unorderable:
    def __init__(self, value: int) -> None:
        self.value = value

    def __eq__(self, other: object) -> bool:
        msg = "ambiguous comparison"
        raise ValueError(msg)

    __hash__ = None  # type: ignore[assignment]


def _context(**filter_kwargs: Any) -> SequencerContext:
    """Helper to build a root SequencerContext over the built-ins."""
    return SequencerContext(
        registry=StrategyRegistry(BUILTIN_SEQUENCERS),
        facet_filter=FacetFilter(FilterConfig(**filter_kwargs)),
        max_depth=64,
    )


class TestApplicability:
    """Verify each sequencer's capability predicate."""

    def test_mapping(self) -> None:
        assert MappingSequencer.applies_to({}, {"a": 1})
        assert not MappingSequencer.applies_to({}, [])

    def test_set(self) -> None:
        assert SetSequencer.applies_to({1}, frozenset({2}))
        assert not SetSequencer.applies_to({1}, [1])

    def test_sequence(self) -> None:
        assert SequenceSequencer.applies_to([1], (1,))
        assert not SequenceSequencer.applies_to("ab", "ab")

    def test_object_applies_to_every_pair(self) -> None:
        assert ObjectSequencer.applies_to(A("x", 1), B("y", 1))
        assert ObjectSequencer.applies_to(A("x", 1), 1)
        assert ObjectSequencer.applies_to(None, None)

    def test_object_descends_only_into_structured_pairs(self) -> None:
        assert ObjectSequencer.descends_into(A("x", 1), B("y", 1))
        assert not ObjectSequencer.descends_into(A("x", 1), 1)
        assert not ObjectSequencer.descends_into(1, 2)

    def test_descends_into_defaults_to_applies_to(self) -> None:
        assert MappingSequencer.descends_into({}, {})
        assert not MappingSequencer.descends_into({}, [])

    def test_builtin_order_most_specific_first(self) -> None:
        assert BUILTIN_SEQUENCERS[-1] is ObjectSequencer


class TestObjectSequencer:
    """Generic object case."""

    def test_same_attribute_set_scenario(self) -> None:
        seq = ObjectSequencer(A("x", 1), B("y", 1), _context()).call()
        assert seq.kind == SequenceKind.object
        assert seq.value_class is B
        assert seq.operations == (
            Operation.change("name", "x", "y"),
            Operation.noop("age", 1, 1),
        )

    def test_order_follows_actual_then_expected_only(self) -> None:
        expected = Link("e")
        expected.only_expected = 1  # type: ignore[attr-defined]
        actual = Link("a")
        actual.only_actual = 2  # type: ignore[attr-defined]
        seq = ObjectSequencer(expected, actual, _context()).call()
        assert [op.key for op in seq] == ["label", "next", "only_actual", "only_expected"]
        assert [op.name for op in seq] == [
            OperationName.change,
            OperationName.noop,
            OperationName.insert,
            OperationName.delete,
        ]

    def test_nested_object_change(self) -> None:
        seq = ObjectSequencer(
            Person("x", Address("A", 1)),
            Person("x", Address("B", 1)),
            _context(),
        ).call()
        name_op, address_op = seq.operations
        assert name_op == Operation.noop("name", "x", "x")
        assert address_op.name == OperationName.change
        assert address_op.children is not None
        assert address_op.children.value_class is Address
        assert address_op.children.operations == (
            Operation.change("city", "A", "B"),
            Operation.noop("zip", 1, 1),
        )

    def test_private_attributes_hidden_by_default(self) -> None:
        expected = Link("x")
        expected._seen = 1  # type: ignore[attr-defined]
        actual = Link("x")
        actual._seen = 2  # type: ignore[attr-defined]
        seq = ObjectSequencer(expected, actual, _context()).call()
        assert [op.key for op in seq] == ["label", "next"]
        assert seq.is_unchanged
        assert seq.ignored == 1

    def test_private_attributes_included_on_request(self) -> None:
        expected = Link("x")
        expected._seen = 1  # type: ignore[attr-defined]
        actual = Link("x")
        actual._seen = 2  # type: ignore[attr-defined]
        seq = ObjectSequencer(expected, actual, _context(include_private=True)).call()
        assert Operation.change("_seen", 1, 2) in seq.operations


class TestMappingSequencer:
    """Mappings compare key by key in insertion order."""

    def test_insert_scenario(self) -> None:
        seq = MappingSequencer({"a": 1}, {"a": 1, "b": 2}, _context()).call()
        assert seq.operations == (Operation.noop("a", 1, 1), Operation.insert("b", 2))

    def test_delete(self) -> None:
        seq = MappingSequencer({"a": 1, "b": 2}, {"a": 1}, _context()).call()
        assert seq.operations == (Operation.noop("a", 1, 1), Operation.delete("b", 2))

    def test_none_value_is_a_change_not_a_delete(self) -> None:
        seq = MappingSequencer({"a": None}, {"a": 1}, _context()).call()
        assert seq.operations == (Operation.change("a", None, 1),)

    def test_numeric_value_equality(self) -> None:
        seq = MappingSequencer({"a": 1}, {"a": 1.0}, _context()).call()
        assert seq.operations[0].name == OperationName.noop

    def test_nested_mapping(self) -> None:
        seq = MappingSequencer({"a": {"b": 1}}, {"a": {"b": 2}}, _context()).call()
        (op,) = seq.operations
        assert op.children is not None
        assert op.children.kind == SequenceKind.mapping
        assert op.children.operations == (Operation.change("b", 1, 2),)

    def test_mismatched_composites_are_flat_changes(self) -> None:
        seq = MappingSequencer({"a": [1]}, {"a": {"x": 1}}, _context()).call()
        assert seq.operations == (Operation.change("a", [1], {"x": 1}),)

    def test_ignored_facets_are_skipped(self) -> None:
        expected = {"id": 1, "user": {"id": 2, "name": "x"}}
        actual = {"id": 9, "user": {"id": 3, "name": "x"}}
        seq = MappingSequencer(expected, actual, _context(ignore_patterns=("id",))).call()
        assert seq.operations == (Operation.noop("user", expected["user"], actual["user"]),)

    def test_anchored_ignore_only_at_root(self) -> None:
        expected = {"id": 1, "user": {"id": 2}}
        actual = {"id": 9, "user": {"id": 3}}
        seq = MappingSequencer(expected, actual, _context(ignore_patterns=("/id",))).call()
        (user_op,) = seq.operations
        assert user_op.key == "user"
        assert user_op.children is not None
        assert user_op.children.operations == (Operation.change("id", 2, 3),)


class TestSequenceSequencer:
    """Lists and tuples compare position by position."""

    def test_change_and_delete(self) -> None:
        seq = SequenceSequencer([1, 2, 3], [1, 5], _context()).call()
        assert seq.operations == (
            Operation.noop(0, 1, 1),
            Operation.change(1, 2, 5),
            Operation.delete(2, 3),
        )

    def test_insert(self) -> None:
        seq = SequenceSequencer((1,), (1, 2), _context()).call()
        assert seq.value_class is tuple
        assert seq.operations == (Operation.noop(0, 1, 1), Operation.insert(1, 2))

    def test_no_alignment_on_prepend(self) -> None:
        seq = SequenceSequencer([1, 2], [0, 1, 2], _context()).call()
        assert [op.name for op in seq] == [
            OperationName.change,
            OperationName.change,
            OperationName.insert,
        ]


class TestSetSequencer:
    """Sets compare by membership."""

    def test_membership(self) -> None:
        seq = SetSequencer({1, 2}, {2, 3}, _context()).call()
        by_key = {op.key: op for op in seq}
        assert by_key[2] == Operation.noop(2, 2, 2)
        assert by_key[3] == Operation.insert(3, 3)
        assert by_key[1] == Operation.delete(1, 1)
        assert OperationName.change not in {op.name for op in seq}

    def test_expected_only_elements_come_last(self) -> None:
        seq = SetSequencer({1}, {2}, _context()).call()
        assert seq.operations == (Operation.insert(2, 2), Operation.delete(1, 1))


class TestEdgeCases:
    """Identity, equality quirks and depth."""

    def test_identity_short_circuits(self) -> None:
        shared = Link("shared")
        seq = MappingSequencer({"a": shared}, {"a": shared}, _context()).call()
        assert seq.operations == (Operation.noop("a", shared, shared),)

    def test_equal_but_distinct_plain_objects_are_noop(self) -> None:
        seq = MappingSequencer({"a": Link("x")}, {"a": Link("x")}, _context()).call()
        assert seq.operations[0].name == OperationName.noop

    def test_same_facets_different_class_is_change(self) -> None:
        seq = MappingSequencer({"p": A("x", 1)}, {"p": B("x", 1)}, _context()).call()
        (op,) = seq.operations
        assert op.name == OperationName.change
        assert op.children is not None
        assert op.children.is_unchanged

    def test_raising_equality_counts_as_unequal(self) -> None:
        assert not values_equal(Unorderable(1), Unorderable(1))
        seq = MappingSequencer({"a": Unorderable(1)}, {"a": Unorderable(1)}, _context()).call()
        assert seq.operations[0].name == OperationName.noop

    def test_cyclic_graphs_hit_max_depth(self) -> None:
        left = Link("x")
        left.next = left
        right = Link("x")
        right.next = right
        differ = Differ(max_depth=5)
        with pytest.raises(MaxDepthExceededError, match="Maximum diff depth of 5"):
            differ.operations(left, right)

    def test_self_reference_diffed_with_itself_is_fine(self) -> None:
        node = Link("x")
        node.next = node
        seq = Differ().operations(node, node)
        assert seq.is_unchanged

    def test_descend_tracks_path(self) -> None:
        context = _context().descend("a").descend(0)
        assert context.depth == 2
        assert context.path == ("a", 0)

    def test_descend_past_limit(self) -> None:
        context = SequencerContext(
            registry=StrategyRegistry(BUILTIN_SEQUENCERS),
            facet_filter=FacetFilter(FilterConfig()),
            max_depth=1,
        )
        with pytest.raises(MaxDepthExceededError) as exc_info:
            context.descend("a").descend("b")
        assert exc_info.value.path == ("a", "b")

    def test_opaque_pair_is_a_single_value_operation(self) -> None:
        seq = ObjectSequencer(1, 2, _context()).call()
        assert seq.kind == SequenceKind.value
        assert seq.value_class is int
        assert seq.operations == (Operation.change(ROOT_KEY, 1, 2),)

    def test_equal_opaque_pair_is_a_noop(self) -> None:
        seq = Differ().operations(None, None)
        assert seq.operations == (Operation.noop(ROOT_KEY, None, None),)

    def test_only_private_differences_nested_are_noop(self) -> None:
        expected = Link("x")
        expected.meta = OnlyPrivate(1)  # type: ignore[attr-defined]
        actual = Link("x")
        actual.meta = OnlyPrivate(2)  # type: ignore[attr-defined]
        seq = ObjectSequencer(expected, actual, _context()).call()
        assert seq.is_unchanged

    def test_missing_sentinel_never_leaks_into_noop(self) -> None:
        seq = MappingSequencer({"a": 1}, {"a": 1}, _context()).call()
        assert seq.operations[0].expected is not MISSING
