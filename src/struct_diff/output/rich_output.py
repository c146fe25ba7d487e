"""Rich console renderer (default output mode)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.text import Text

if TYPE_CHECKING:
    from struct_diff.core.models import DiffResult, DiffStats

_MARKER_STYLES: dict[str, str] = {
    "+": "green",
    "-": "red",
    "~": "yellow",
}


def _line_style(line: str) -> str:
    """Return the Rich style for a rendered diff line, keyed by its marker."""
    if not line:
        return ""
    if line[0] in _MARKER_STYLES:
        return _MARKER_STYLES[line[0]]
    if line[0] == " ":
        return "dim"
    return "bold"


class RichRenderer:
    """Renders diff lines with colour-coded change markers.

    Line styles (keyed by the first column):
    - Inserted: green '+'
    - Deleted: red '-'
    - Changed: yellow '~'
    - Unchanged: dim
    - Block boundaries (e.g. '#<Point', '>'): bold
    """

    def __init__(self, console: Console | None = None) -> None:
        """Initialize with an optional Rich console.

        Args:
            console: Rich Console instance. Defaults to Console() if None.
        """
        self._console = console or Console()

    def render(self, result: DiffResult) -> None:
        """Print every diff line with its marker style."""
        for line in result.lines:
            self._console.print(Text(line, style=_line_style(line)), highlight=False)

    def render_stats(self, stats: DiffStats) -> None:
        """Render summary statistics."""
        self._console.print(
            f"[bold]{stats.total}[/bold] facets compared: "
            f"[green]{stats.inserted} inserted[/green], "
            f"[red]{stats.deleted} deleted[/red], "
            f"[yellow]{stats.changed} changed[/yellow], "
            f"[dim]{stats.unchanged} unchanged[/dim]"
        )
