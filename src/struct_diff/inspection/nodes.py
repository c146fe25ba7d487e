"""Inspection nodes: renderable units of the lazy display tree.

Every node renders two ways:

- ``render_inline()`` collapses the node onto one string
- ``render_lines(indent_level)`` lazily yields Line objects, possibly
  interleaved with PreludeForNextNode markers

A prelude is glued onto the start of the next line emitted after it. The
enclosing Group does the gluing and hands a trailing prelude up to its
parent; ``flatten()`` rejects a tree that still has one left at the end.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from struct_diff.core.errors import MalformedNodeTreeError
from struct_diff.inspection.primitives import inspect_primitive

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Sequence

BLANK_MARKER = " "


@dataclass(frozen=True)
class Line:
    """A single output line at a given nesting level.

    The marker occupies the first column of the indentation, so the text
    always starts at ``indent_level * indent_width``. At level 0 there is
    no indentation and the marker is followed by a space instead.
    """

    indent_level: int
    value: str
    marker: str = BLANK_MARKER

    def prefixed(self, prelude: str) -> Line:
        return replace(self, value=prelude + self.value)

    def with_marker(self, marker: str) -> Line:
        return replace(self, marker=marker)

    def render(self, indent_width: int = 2) -> str:
        """Render the line with its marker and indentation."""
        padding = " " * (self.indent_level * indent_width)
        if self.marker == BLANK_MARKER:
            return padding + self.value
        if not padding:
            return f"{self.marker} {self.value}"
        return self.marker + padding[1:] + self.value


@dataclass(frozen=True)
class PreludeForNextNode:
    """Text that prefixes the next rendered line instead of taking its own."""

    value: str


Rendered = Line | PreludeForNextNode


class Node(ABC):
    """Base class for every inspection node."""

    @abstractmethod
    def render_inline(self) -> str:
        """Render the node as a single string."""

    @abstractmethod
    def render_lines(self, indent_level: int) -> Iterator[Rendered]:
        """Lazily render the node as lines at the given indent level."""


class Text(Node):
    """Literal text, used as-is in both modes."""

    def __init__(self, text: str) -> None:
        self.text = text

    def render_inline(self) -> str:
        return self.text

    def render_lines(self, indent_level: int) -> Iterator[Rendered]:
        yield Line(indent_level, self.text)

    def __repr__(self) -> str:
        return f"Text({self.text!r})"


class Primitive(Node):
    """An immediate value, shown through its scalar inspection."""

    def __init__(self, value: object) -> None:
        self.value = value

    def render_inline(self) -> str:
        return inspect_primitive(self.value)

    def render_lines(self, indent_level: int) -> Iterator[Rendered]:
        yield Line(indent_level, self.render_inline())

    def __repr__(self) -> str:
        return f"Primitive({self.value!r})"


class AsPreludeWhenRenderingToLines(Node):
    """Collapses onto one string that prefixes the next line in lines mode.

    Wraps either an immediate value or a subtree. Inline, the subtree (if
    any) is rendered inline; otherwise the immediate value is converted with
    ``str()``. In lines mode the same string is emitted as a single
    PreludeForNextNode rather than as a line of its own.
    """

    def __init__(self, immediate_value: object = None, *, subtree: Node | None = None) -> None:
        self.immediate_value = immediate_value
        self.subtree = subtree

    def render_inline(self) -> str:
        if self.subtree is not None:
            return self.subtree.render_inline()
        return str(self.immediate_value)

    def render_lines(self, indent_level: int) -> Iterator[Rendered]:
        yield PreludeForNextNode(self.render_inline())


class _Boundary(Node):
    def __init__(self, text: str) -> None:
        self.text = text

    def render_inline(self) -> str:
        return self.text

    def render_lines(self, indent_level: int) -> Iterator[Rendered]:
        yield Line(indent_level, self.text)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.text!r})"


class CollectionOpen(_Boundary):
    """Opening boundary of a collection, e.g. '{' or '#<Point'."""


class CollectionClose(_Boundary):
    """Closing boundary of a collection, e.g. '}' or '>'."""


class Delimiter(Node):
    """Separator between items. Inline only: lines mode emits nothing."""

    def __init__(self, text: str = ", ") -> None:
        self.text = text

    def render_inline(self) -> str:
        return self.text

    def render_lines(self, indent_level: int) -> Iterator[Rendered]:
        yield from ()


class Group(Node):
    """Children rendered in order at the same indent level."""

    def __init__(self, children: Iterable[Node]) -> None:
        self.children: tuple[Node, ...] = tuple(children)

    def render_inline(self) -> str:
        return "".join(child.render_inline() for child in self.children)

    def render_lines(self, indent_level: int) -> Iterator[Rendered]:
        return attach_preludes(
            item for child in self.children for item in child.render_lines(indent_level)
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self.children)!r})"


class Nesting(Group):
    """Children rendered one level deeper than the enclosing node.

    Inline, the children are joined and preceded by ``inline_prefix`` when
    there is anything to show.
    """

    def __init__(self, children: Iterable[Node], *, inline_prefix: str = "") -> None:
        super().__init__(children)
        self.inline_prefix = inline_prefix

    def render_inline(self) -> str:
        body = super().render_inline()
        return self.inline_prefix + body if body else body

    def render_lines(self, indent_level: int) -> Iterator[Rendered]:
        return super().render_lines(indent_level + 1)


class Marked(Node):
    """Applies a change marker to the lines of its child.

    With first_line_only, only the first line is marked and nested lines
    keep the markers they were given.
    """

    def __init__(self, marker: str, child: Node, *, first_line_only: bool = False) -> None:
        self.marker = marker
        self.child = child
        self.first_line_only = first_line_only

    def render_inline(self) -> str:
        return self.child.render_inline()

    def render_lines(self, indent_level: int) -> Iterator[Rendered]:
        marked_any = False
        for item in self.child.render_lines(indent_level):
            if isinstance(item, Line) and not (self.first_line_only and marked_any):
                marked_any = True
                yield item.with_marker(self.marker)
            else:
                yield item

    def __repr__(self) -> str:
        return f"Marked({self.marker!r}, {self.child!r})"


def attach_preludes(items: Iterable[Rendered]) -> Iterator[Rendered]:
    """Glue pending preludes onto the next line.

    Consecutive preludes concatenate. A prelude still pending when items
    run out is yielded last, for an enclosing node to attach.
    """
    pending = ""
    has_pending = False
    for item in items:
        if isinstance(item, PreludeForNextNode):
            pending += item.value
            has_pending = True
            continue
        if has_pending:
            item = item.prefixed(pending)
            pending = ""
            has_pending = False
        yield item
    if has_pending:
        yield PreludeForNextNode(pending)


def flatten(node: Node, indent_level: int = 0) -> list[Line]:
    """Render a node tree to lines with every prelude attached.

    Raises:
        MalformedNodeTreeError: If a prelude has no line to attach to.
    """
    lines: list[Line] = []
    for item in attach_preludes(node.render_lines(indent_level)):
        if isinstance(item, PreludeForNextNode):
            msg = f"Prelude {item.value!r} has no following node to attach to"
            raise MalformedNodeTreeError(msg)
        lines.append(item)
    return lines


def render_lines(node: Node, *, indent_level: int = 0, indent_width: int = 2) -> list[str]:
    """Render a node tree to ready-to-print strings."""
    return [line.render(indent_width) for line in flatten(node, indent_level)]


def join_inline(nodes: Sequence[Node], delimiter: str = ", ") -> list[Node]:
    """Interleave nodes with Delimiter nodes."""
    joined: list[Node] = []
    for index, node in enumerate(nodes):
        if index:
            joined.append(Delimiter(delimiter))
        joined.append(node)
    return joined
