"""Renderer protocol for diff output."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from struct_diff.core.models import DiffResult, DiffStats


@runtime_checkable
class Renderer(Protocol):
    """Protocol for rendering diff results.

    Implementations must provide render() for the full diff and
    render_stats() for the summary, writing to their own destination
    (console, stream, etc.).
    """

    def render(self, result: DiffResult) -> None:
        """Render the diff result."""
        ...

    def render_stats(self, stats: DiffStats) -> None:
        """Render summary statistics."""
        ...
