"""Public API for struct_diff.output."""

from __future__ import annotations

from struct_diff.output.base import Renderer
from struct_diff.output.json_output import JsonRenderer
from struct_diff.output.plain_output import PlainRenderer
from struct_diff.output.rich_output import RichRenderer

__all__ = [
    "JsonRenderer",
    "PlainRenderer",
    "Renderer",
    "RichRenderer",
]
