"""Data models for struct-diff operations and results."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, StrEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Hashable, Iterator


class _Missing(Enum):
    """Sentinel type for a value absent from one side of a comparison."""

    MISSING = "MISSING"

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing.MISSING


class OperationName(StrEnum):
    """Kind of a single diff operation."""

    noop = "noop"
    insert = "insert"
    delete = "delete"
    change = "change"


class SequenceKind(StrEnum):
    """Built-in shapes of operation sequences; ``value`` is an opaque pair."""

    object = "object"
    mapping = "mapping"
    sequence = "sequence"
    set = "set"
    value = "value"


class OutputMode(StrEnum):
    """Output format for rendering results."""

    rich = "rich"
    plain = "plain"
    json = "json"


@dataclass(frozen=True)
class Operation:
    """A single facet-level difference between expected and actual.

    ``expected`` is MISSING for inserts and ``actual`` is MISSING for
    deletes. ``children`` holds the nested sequence of a change whose
    values were themselves diffable.
    """

    name: OperationName
    key: Hashable
    expected: Any = MISSING
    actual: Any = MISSING
    children: OperationSequence | None = None

    def __post_init__(self) -> None:
        has_expected = self.expected is not MISSING
        has_actual = self.actual is not MISSING

        if self.name == OperationName.insert and (has_expected or not has_actual):
            msg = f"Insert operation for {self.key!r} must carry only an actual value"
            raise ValueError(msg)
        if self.name == OperationName.delete and (has_actual or not has_expected):
            msg = f"Delete operation for {self.key!r} must carry only an expected value"
            raise ValueError(msg)
        if self.name in (OperationName.change, OperationName.noop) and not (
            has_expected and has_actual
        ):
            msg = f"{self.name.capitalize()} operation for {self.key!r} needs both values"
            raise ValueError(msg)
        if self.children is not None and self.name != OperationName.change:
            msg = f"Only change operations may carry children, got {self.name}"
            raise ValueError(msg)

    @classmethod
    def noop(cls, key: Hashable, expected: Any, actual: Any) -> Operation:
        return cls(OperationName.noop, key, expected, actual)

    @classmethod
    def insert(cls, key: Hashable, actual: Any) -> Operation:
        return cls(OperationName.insert, key, actual=actual)

    @classmethod
    def delete(cls, key: Hashable, expected: Any) -> Operation:
        return cls(OperationName.delete, key, expected=expected)

    @classmethod
    def change(
        cls,
        key: Hashable,
        expected: Any,
        actual: Any,
        children: OperationSequence | None = None,
    ) -> Operation:
        return cls(OperationName.change, key, expected, actual, children)


@dataclass(frozen=True)
class OperationSequence:
    """Ordered operations describing how expected becomes actual.

    ``ignored`` counts the facets the facet filter left out.
    """

    kind: str
    value_class: type
    operations: tuple[Operation, ...]
    ignored: int = 0

    @property
    def is_unchanged(self) -> bool:
        """True when every operation is a noop."""
        return all(op.name == OperationName.noop for op in self.operations)

    def __iter__(self) -> Iterator[Operation]:
        return iter(self.operations)

    def __len__(self) -> int:
        return len(self.operations)


@dataclass(frozen=True)
class DiffStats:
    """Leaf operation counts for a diff, nested sequences included."""

    unchanged: int
    changed: int
    inserted: int
    deleted: int

    @property
    def total(self) -> int:
        return self.unchanged + self.changed + self.inserted + self.deleted

    @property
    def has_differences(self) -> bool:
        return (self.changed + self.inserted + self.deleted) > 0

    @classmethod
    def from_sequence(cls, sequence: OperationSequence) -> DiffStats:
        """Count operations, descending into nested changes.

        A nested change whose children are all unchanged differs only in
        type and counts as one change.
        """
        counts = dict.fromkeys(OperationName, 0)
        pending = [sequence]
        while pending:
            current = pending.pop()
            for op in current.operations:
                if op.children is not None and not op.children.is_unchanged:
                    pending.append(op.children)
                else:
                    counts[op.name] += 1
        return cls(
            unchanged=counts[OperationName.noop],
            changed=counts[OperationName.change],
            inserted=counts[OperationName.insert],
            deleted=counts[OperationName.delete],
        )


@dataclass(frozen=True)
class DiffResult:
    """Top-level result of a diff run."""

    operations: OperationSequence
    lines: tuple[str, ...]
    stats: DiffStats
