"""Inspection tree builders: turn any value into a node tree."""

from __future__ import annotations

from collections.abc import Mapping, Set
from typing import TYPE_CHECKING, Any

from struct_diff.core.errors import MaxDepthExceededError
from struct_diff.core.facets import object_facets
from struct_diff.core.filtering import FilterConfig
from struct_diff.core.registry import StrategyRegistry
from struct_diff.inspection.nodes import (
    AsPreludeWhenRenderingToLines,
    CollectionClose,
    CollectionOpen,
    Group,
    Nesting,
    Primitive,
    Text,
    join_inline,
)
from struct_diff.inspection.primitives import inspect_primitive

if TYPE_CHECKING:
    from collections.abc import Iterable

    from struct_diff.inspection.nodes import Node

DEFAULT_MAX_DEPTH = 64


def object_open_text(value_class: type) -> str:
    """Opening boundary for a structured object, e.g. '#<Point'."""
    return f"#<{value_class.__name__}"


def sequence_boundaries(value_class: type) -> tuple[str, str]:
    """Return (open, close) brackets for a list or tuple class."""
    if issubclass(value_class, tuple):
        return "(", ")"
    return "[", "]"


def set_boundaries(value_class: type) -> tuple[str, str]:
    """Return (open, close) brackets for a set or frozenset class."""
    if issubclass(value_class, frozenset):
        return "frozenset({", "})"
    return "{", "}"


def is_sequence(value: object) -> bool:
    return isinstance(value, (list, tuple))


class InspectionTreeBuilder:
    """Base class for per-type tree builders.

    Subclasses implement applies_to() and build(). Builders recurse into
    nested values through ``inspector.tree()``.
    """

    @classmethod
    def applies_to(cls, value: Any) -> bool:
        raise NotImplementedError

    def __init__(self, inspector: Inspector, depth: int) -> None:
        self._inspector = inspector
        self._depth = depth

    def build(self, value: Any) -> Node:
        raise NotImplementedError

    def _subtree(self, value: Any) -> Node:
        return self._inspector.tree(value, depth=self._depth + 1)

    def _collection(
        self,
        open_text: str,
        close_text: str,
        items: Iterable[Node],
        *,
        empty_text: str | None = None,
        inline_prefix: str = "",
    ) -> Node:
        children = list(items)
        if not children:
            return Text(empty_text if empty_text is not None else open_text + close_text)
        return Group(
            [
                CollectionOpen(open_text),
                Nesting(join_inline(children), inline_prefix=inline_prefix),
                CollectionClose(close_text),
            ]
        )

    def _labelled(self, label: str, value: Any) -> Node:
        return Group([AsPreludeWhenRenderingToLines(label), self._subtree(value)])


class MappingTreeBuilder(InspectionTreeBuilder):
    """Renders mappings as {"key": value, ...}."""

    @classmethod
    def applies_to(cls, value: Any) -> bool:
        return isinstance(value, Mapping)

    def build(self, value: Any) -> Node:
        return self._collection(
            "{",
            "}",
            (self._labelled(f"{inspect_primitive(key)}: ", item) for key, item in value.items()),
        )


class SetTreeBuilder(InspectionTreeBuilder):
    """Renders sets as {a, b}; the empty set as set()."""

    @classmethod
    def applies_to(cls, value: Any) -> bool:
        return isinstance(value, Set)

    def build(self, value: Any) -> Node:
        open_text, close_text = set_boundaries(type(value))
        return self._collection(
            open_text,
            close_text,
            (self._subtree(item) for item in value),
            empty_text=f"{type(value).__name__}()",
        )


class SequenceTreeBuilder(InspectionTreeBuilder):
    """Renders lists as [a, b] and tuples as (a, b)."""

    @classmethod
    def applies_to(cls, value: Any) -> bool:
        return is_sequence(value)

    def build(self, value: Any) -> Node:
        open_text, close_text = sequence_boundaries(type(value))
        return self._collection(open_text, close_text, (self._subtree(item) for item in value))


class ObjectTreeBuilder(InspectionTreeBuilder):
    """Renders structured objects as #<ClassName field: value, ...>."""

    @classmethod
    def applies_to(cls, value: Any) -> bool:
        return object_facets(value, include_private=True) is not None

    def build(self, value: Any) -> Node:
        facets = object_facets(value, include_private=self._inspector.include_private)
        if facets is None:
            return Primitive(value)
        return self._collection(
            object_open_text(type(value)),
            ">",
            (self._labelled(f"{name}: ", item) for name, item in facets.items()),
            inline_prefix=" ",
        )


class PrimitiveTreeBuilder(InspectionTreeBuilder):
    """Fallback: any value as a single primitive node."""

    @classmethod
    def applies_to(cls, value: Any) -> bool:
        return True

    def build(self, value: Any) -> Node:
        return Primitive(value)


BUILTIN_TREE_BUILDERS: tuple[type[InspectionTreeBuilder], ...] = (
    MappingTreeBuilder,
    SetTreeBuilder,
    SequenceTreeBuilder,
    ObjectTreeBuilder,
    PrimitiveTreeBuilder,
)


class Inspector:
    """Builds inspection trees for arbitrary values.

    Holds its own registry of tree builders; the primitive builder always
    applies, so every value can be inspected.
    """

    def __init__(
        self,
        *,
        filter_config: FilterConfig | None = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
        extra_tree_builder_classes: Iterable[type[InspectionTreeBuilder]] = (),
    ) -> None:
        """Initialize the inspector.

        Args:
            filter_config: Facet filtering rules. Defaults to FilterConfig().
            max_depth: Deepest nesting level rendered before giving up.
            extra_tree_builder_classes: Builders tried before the built-ins.
        """
        self._filter_config = filter_config or FilterConfig()
        self._max_depth = max_depth
        self._registry: StrategyRegistry[type[InspectionTreeBuilder]] = StrategyRegistry(
            BUILTIN_TREE_BUILDERS,
            extras=extra_tree_builder_classes,
        )

    @property
    def include_private(self) -> bool:
        return self._filter_config.include_private

    def tree(self, value: Any, *, depth: int = 0) -> Node:
        """Build the inspection tree for a value.

        Raises:
            MaxDepthExceededError: If the value nests deeper than max_depth.
        """
        if depth > self._max_depth:
            raise MaxDepthExceededError(self._max_depth)
        builder_class = self._registry.select(value)
        return builder_class(self, depth).build(value)

    def inline(self, value: Any) -> str:
        """Inspect a value onto a single line."""
        return self.tree(value).render_inline()
