"""Diff formatters: turn an operation sequence into an inspection node tree."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar

from struct_diff.core.models import OperationName, SequenceKind
from struct_diff.inspection.builders import (
    object_open_text,
    sequence_boundaries,
    set_boundaries,
)
from struct_diff.inspection.nodes import (
    AsPreludeWhenRenderingToLines,
    CollectionClose,
    CollectionOpen,
    Group,
    Marked,
    Nesting,
    Text,
)
from struct_diff.inspection.primitives import inspect_primitive

if TYPE_CHECKING:
    from struct_diff.core.models import Operation, OperationSequence
    from struct_diff.core.registry import StrategyRegistry
    from struct_diff.inspection.builders import Inspector
    from struct_diff.inspection.nodes import Node

MARKERS: dict[OperationName, str] = {
    OperationName.insert: "+",
    OperationName.delete: "-",
    OperationName.change: "~",
    OperationName.noop: " ",
}

CHANGE_ARROW = " => "


@dataclass(frozen=True)
class FormatterContext:
    """Formatter registry and value inspector shared by nested formatters."""

    registry: StrategyRegistry[type[DiffFormatter]]
    inspector: Inspector

    def format(self, sequence: OperationSequence) -> Node:
        """Select a formatter for the sequence and build its node tree.

        Raises:
            NoApplicableFormatterError: If no registered formatter applies.
        """
        formatter_class = self.registry.select(sequence)
        return formatter_class(sequence, self).call()


class DiffFormatter:
    """Base class for diff formatters.

    Builds ``open``, one marked node per operation one level deeper, then
    ``close``. Subclasses set ``kind`` and provide the boundaries and the
    facet label.
    """

    kind: ClassVar[str]

    def __init__(self, sequence: OperationSequence, context: FormatterContext) -> None:
        self._sequence = sequence
        self._context = context

    @classmethod
    def applies_to(cls, sequence: OperationSequence) -> bool:
        return sequence.kind == cls.kind

    def open_text(self) -> str:
        raise NotImplementedError

    def close_text(self) -> str:
        raise NotImplementedError

    def label(self, operation: Operation) -> str | None:
        """Text shown before an operation's value, or None for no label."""
        return None

    def call(self) -> Node:
        """Build the diff block node tree."""
        return Group(
            [
                CollectionOpen(self.open_text()),
                Nesting(self._operation_node(op) for op in self._sequence.operations),
                CollectionClose(self.close_text()),
            ]
        )

    def _operation_node(self, operation: Operation) -> Node:
        marker = MARKERS[operation.name]

        if operation.children is not None:
            nested = self._context.format(operation.children)
            return Marked(marker, self._labelled(operation, nested), first_line_only=True)

        if operation.name == OperationName.change:
            value_node: Node = Text(
                self._inline(operation.expected) + CHANGE_ARROW + self._inline(operation.actual)
            )
        elif operation.name == OperationName.delete:
            value_node = self._context.inspector.tree(operation.expected)
        else:
            value_node = self._context.inspector.tree(operation.actual)

        return Marked(marker, self._labelled(operation, value_node))

    def _labelled(self, operation: Operation, node: Node) -> Node:
        label = self.label(operation)
        if label is None:
            return node
        return Group([AsPreludeWhenRenderingToLines(label), node])

    def _inline(self, value: Any) -> str:
        return self._context.inspector.inline(value)


class ObjectDiffFormatter(DiffFormatter):
    """#<ClassName ... > with one ``attribute: value`` line per operation."""

    kind = SequenceKind.object

    def open_text(self) -> str:
        return object_open_text(self._sequence.value_class)

    def close_text(self) -> str:
        return ">"

    def label(self, operation: Operation) -> str | None:
        return f"{operation.key}: "


class MappingDiffFormatter(DiffFormatter):
    """{ ... } with one ``"key": value`` line per operation."""

    kind = SequenceKind.mapping

    def open_text(self) -> str:
        return "{"

    def close_text(self) -> str:
        return "}"

    def label(self, operation: Operation) -> str | None:
        return f"{inspect_primitive(operation.key)}: "


class SequenceDiffFormatter(DiffFormatter):
    """[ ... ] (or ( ... ) for tuples) with one unlabelled line per index."""

    kind = SequenceKind.sequence

    def open_text(self) -> str:
        return sequence_boundaries(self._sequence.value_class)[0]

    def close_text(self) -> str:
        return sequence_boundaries(self._sequence.value_class)[1]


class SetDiffFormatter(DiffFormatter):
    """{ ... } with one unlabelled line per element."""

    kind = SequenceKind.set

    def open_text(self) -> str:
        return set_boundaries(self._sequence.value_class)[0]

    def close_text(self) -> str:
        return set_boundaries(self._sequence.value_class)[1]


class ValueDiffFormatter(DiffFormatter):
    """An opaque pair: its single operation, without boundaries."""

    kind = SequenceKind.value

    def call(self) -> Node:
        return Group(self._operation_node(op) for op in self._sequence.operations)


BUILTIN_DIFF_FORMATTERS: tuple[type[DiffFormatter], ...] = (
    ObjectDiffFormatter,
    MappingDiffFormatter,
    SequenceDiffFormatter,
    SetDiffFormatter,
    ValueDiffFormatter,
)
