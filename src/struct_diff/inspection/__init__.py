"""Inspection trees: render any value inline or as indented lines."""

from struct_diff.inspection.builders import Inspector, InspectionTreeBuilder
from struct_diff.inspection.nodes import (
    AsPreludeWhenRenderingToLines,
    CollectionClose,
    CollectionOpen,
    Delimiter,
    Group,
    Line,
    Marked,
    Nesting,
    Node,
    PreludeForNextNode,
    Primitive,
    Text,
    flatten,
    render_lines,
)

__all__ = [
    "AsPreludeWhenRenderingToLines",
    "CollectionClose",
    "CollectionOpen",
    "Delimiter",
    "Group",
    "InspectionTreeBuilder",
    "Inspector",
    "Line",
    "Marked",
    "Nesting",
    "Node",
    "PreludeForNextNode",
    "Primitive",
    "Text",
    "flatten",
    "render_lines",
]
