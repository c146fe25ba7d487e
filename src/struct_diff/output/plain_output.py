"""Plain-text renderer: the diff lines exactly as the core produces them."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import TextIO

    from struct_diff.core.models import DiffResult, DiffStats


def format_stats(stats: DiffStats) -> str:
    """One-line summary of a diff's operation counts."""
    return (
        f"{stats.total} facets compared: "
        f"{stats.inserted} inserted, "
        f"{stats.deleted} deleted, "
        f"{stats.changed} changed, "
        f"{stats.unchanged} unchanged"
    )


class PlainRenderer:
    """Writes diff lines to a text stream without any styling.

    Output goes to stdout by default. Pass a custom TextIO for file output
    or testing.
    """

    def __init__(self, output: TextIO | None = None) -> None:
        """Initialize with an optional output stream.

        Args:
            output: Text stream for output. Defaults to sys.stdout.
        """
        self._output = output or sys.stdout

    def render(self, result: DiffResult) -> None:
        """Write each diff line."""
        for line in result.lines:
            self._output.write(line + "\n")

    def render_stats(self, stats: DiffStats) -> None:
        """Write the summary line."""
        self._output.write(format_stats(stats) + "\n")
