"""Operational sequencers: walk two values in parallel and emit diff operations."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Set
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, ClassVar

from struct_diff.core.errors import MaxDepthExceededError
from struct_diff.core.facets import is_private, object_facets
from struct_diff.core.models import Operation, OperationSequence, SequenceKind

if TYPE_CHECKING:
    from collections.abc import Hashable

    from struct_diff.core.filtering import FacetFilter
    from struct_diff.core.registry import StrategyRegistry

logger = logging.getLogger(__name__)

# Key of the single operation in an opaque value comparison.
ROOT_KEY = None


@dataclass(frozen=True)
class SequencerContext:
    """Everything a sequencer needs besides the two values.

    Passed down explicitly so that no comparison reads shared state.
    """

    registry: StrategyRegistry[type[OperationalSequencer]]
    facet_filter: FacetFilter
    max_depth: int
    depth: int = 0
    path: tuple[Hashable, ...] = ()

    def descend(self, key: Hashable) -> SequencerContext:
        """Return the context for a nested comparison under key.

        Raises:
            MaxDepthExceededError: If the nested depth exceeds max_depth.
        """
        path = (*self.path, key)
        if self.depth + 1 > self.max_depth:
            raise MaxDepthExceededError(self.max_depth, path)
        return replace(self, depth=self.depth + 1, path=path)

    def is_ignored(self, key: Hashable) -> bool:
        return self.facet_filter.is_ignored((*self.path, key))


def values_equal(expected: Any, actual: Any) -> bool:
    """Identity or value equality; comparisons that cannot decide count as unequal."""
    if expected is actual:
        return True
    try:
        return bool(expected == actual)
    except (TypeError, ValueError, RecursionError):
        return False


class OperationalSequencer:
    """Base class for sequencers.

    Subclasses set ``kind`` and implement applies_to() and facets(). The
    shared call() takes the union of both sides' facets, ordered by the
    actual value first, and classifies each one:

    - only in actual: insert
    - only in expected: delete
    - equal in both: noop
    - unequal in both: change, nested when a registered sequencer descends
      into the two sub-values

    Facets removed by the facet filter are skipped and counted in the
    sequence's ``ignored`` total.
    """

    kind: ClassVar[str]

    def __init__(self, expected: Any, actual: Any, context: SequencerContext) -> None:
        self._expected = expected
        self._actual = actual
        self._context = context

    @classmethod
    def applies_to(cls, expected: Any, actual: Any) -> bool:
        """Return True if this sequencer can compare the two values."""
        raise NotImplementedError

    @classmethod
    def descends_into(cls, expected: Any, actual: Any) -> bool:
        """Return True if a nested pair of values should be compared facet by facet."""
        return cls.applies_to(expected, actual)

    def facets(self, value: Any) -> Mapping[Hashable, Any]:
        """Return the ordered comparable facets of one side."""
        raise NotImplementedError

    def is_filtered(self, key: Hashable) -> bool:
        """Return True if the facet under key is left out of the comparison."""
        return self._context.is_ignored(key)

    def call(self) -> OperationSequence:
        """Produce the ordered operation sequence."""
        expected_facets = self.facets(self._expected)
        actual_facets = self.facets(self._actual)

        keys = list(actual_facets)
        keys.extend(key for key in expected_facets if key not in actual_facets)

        operations: list[Operation] = []
        ignored = 0
        for key in keys:
            if self.is_filtered(key):
                ignored += 1
                continue

            in_expected = key in expected_facets
            in_actual = key in actual_facets

            if in_expected and in_actual:
                operations.append(
                    self._compare_facet(key, expected_facets[key], actual_facets[key])
                )
            elif in_actual:
                operations.append(Operation.insert(key, actual_facets[key]))
            else:
                operations.append(Operation.delete(key, expected_facets[key]))

        return OperationSequence(
            kind=self.kind,
            value_class=type(self._actual),
            operations=tuple(operations),
            ignored=ignored,
        )

    def _compare_facet(self, key: Hashable, expected: Any, actual: Any) -> Operation:
        if values_equal(expected, actual):
            return Operation.noop(key, expected, actual)

        sequencer_class = self._context.registry.find(expected, actual)
        if sequencer_class is None or not sequencer_class.descends_into(expected, actual):
            return Operation.change(key, expected, actual)

        logger.debug("Descending into %r with %s", key, sequencer_class.__name__)
        children = sequencer_class(expected, actual, self._context.descend(key)).call()

        if not children.operations and not children.ignored:
            return Operation.change(key, expected, actual)
        if children.is_unchanged and type(expected) is type(actual):
            return Operation.noop(key, expected, actual)
        return Operation.change(key, expected, actual, children)


class MappingSequencer(OperationalSequencer):
    """Compares mappings key by key, in insertion order."""

    kind = SequenceKind.mapping

    @classmethod
    def applies_to(cls, expected: Any, actual: Any) -> bool:
        return isinstance(expected, Mapping) and isinstance(actual, Mapping)

    def facets(self, value: Any) -> Mapping[Hashable, Any]:
        return value


class SetSequencer(OperationalSequencer):
    """Compares sets by membership: elements are only ever inserted or deleted."""

    kind = SequenceKind.set

    @classmethod
    def applies_to(cls, expected: Any, actual: Any) -> bool:
        return isinstance(expected, Set) and isinstance(actual, Set)

    def facets(self, value: Any) -> Mapping[Hashable, Any]:
        return {item: item for item in value}


class SequenceSequencer(OperationalSequencer):
    """Compares lists and tuples position by position (no alignment)."""

    kind = SequenceKind.sequence

    @classmethod
    def applies_to(cls, expected: Any, actual: Any) -> bool:
        return isinstance(expected, (list, tuple)) and isinstance(actual, (list, tuple))

    def facets(self, value: Any) -> Mapping[Hashable, Any]:
        return dict(enumerate(value))


class ObjectSequencer(OperationalSequencer):
    """Generic case: applies to every pair of values.

    Two structured objects (see :func:`struct_diff.core.facets.object_facets`)
    are compared attribute by attribute, regardless of class. Any other pair
    is opaque and yields a one-operation ``value`` sequence: a noop when the
    values are equal, a flat change otherwise.
    """

    kind = SequenceKind.object

    @classmethod
    def applies_to(cls, expected: Any, actual: Any) -> bool:
        return True

    @classmethod
    def descends_into(cls, expected: Any, actual: Any) -> bool:
        return (
            object_facets(expected, include_private=True) is not None
            and object_facets(actual, include_private=True) is not None
        )

    def facets(self, value: Any) -> Mapping[Hashable, Any]:
        return object_facets(value, include_private=True) or {}

    def is_filtered(self, key: Hashable) -> bool:
        if is_private(key) and not self._context.facet_filter.include_private:
            return True
        return super().is_filtered(key)

    def call(self) -> OperationSequence:
        if self.descends_into(self._expected, self._actual):
            return super().call()

        if values_equal(self._expected, self._actual):
            operation = Operation.noop(ROOT_KEY, self._expected, self._actual)
        else:
            operation = Operation.change(ROOT_KEY, self._expected, self._actual)
        return OperationSequence(
            kind=SequenceKind.value,
            value_class=type(self._actual),
            operations=(operation,),
        )


BUILTIN_SEQUENCERS: tuple[type[OperationalSequencer], ...] = (
    MappingSequencer,
    SetSequencer,
    SequenceSequencer,
    ObjectSequencer,
)
