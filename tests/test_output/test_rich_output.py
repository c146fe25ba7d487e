"""Tests for struct_diff.output.rich_output."""

from __future__ import annotations

from io import StringIO

from rich.console import Console

from struct_diff.core.differ import Differ
from struct_diff.core.models import DiffResult, DiffStats
from struct_diff.output.base import Renderer
from struct_diff.output.rich_output import RichRenderer, _line_style


def _make_result() -> DiffResult:
    """Helper to build a DiffResult for testing."""
    return Differ().compare({"a": 1, "b": 2, "c": 3}, {"a": 1, "b": 5, "d": 4})


def _capture_render(renderer: RichRenderer, result: DiffResult) -> str:
    """Render a result and capture the output as a string."""
    renderer.render(result)
    file = renderer._console.file
    assert isinstance(file, StringIO)
    return file.getvalue()


def _capture_stats(renderer: RichRenderer, stats: DiffStats) -> str:
    """Render stats and capture the output as a string."""
    renderer.render_stats(stats)
    file = renderer._console.file
    assert isinstance(file, StringIO)
    return file.getvalue()


class TestRichRendererInit:
    """Verify RichRenderer constructor."""

    def test_default_console(self) -> None:
        r = RichRenderer()
        assert r._console is not None

    def test_custom_console(self) -> None:
        console = Console(file=StringIO())
        r = RichRenderer(console=console)
        assert r._console is console

    def test_satisfies_protocol(self) -> None:
        assert isinstance(RichRenderer(), Renderer)


class TestLineStyle:
    """Verify the style picked from a line's first column."""

    def test_markers(self) -> None:
        assert _line_style("+ x") == "green"
        assert _line_style("- x") == "red"
        assert _line_style("~ x") == "yellow"

    def test_unchanged_is_dim(self) -> None:
        assert _line_style('  "a": 1') == "dim"

    def test_boundaries_are_bold(self) -> None:
        assert _line_style("#<Point") == "bold"
        assert _line_style("}") == "bold"

    def test_empty_line(self) -> None:
        assert _line_style("") == ""


class TestRichRendererRender:
    """Verify diff line output."""

    def test_plain_console_keeps_lines_verbatim(self) -> None:
        console = Console(file=StringIO(), width=120)
        r = RichRenderer(console=console)
        output = _capture_render(r, _make_result())
        assert output.splitlines() == [
            "{",
            '  "a": 1',
            '~ "b": 2 => 5',
            '+ "d": 4',
            '- "c": 3',
            "}",
        ]

    def test_terminal_output_is_styled(self) -> None:
        console = Console(file=StringIO(), force_terminal=True, width=120)
        r = RichRenderer(console=console)
        output = _capture_render(r, _make_result())
        assert "\x1b[" in output
        assert '"d": 4' in output

    def test_brackets_in_values_are_not_markup(self) -> None:
        console = Console(file=StringIO(), width=120)
        r = RichRenderer(console=console)
        result = Differ().compare({"a": "[red]x[/red]"}, {"a": "y"})
        output = _capture_render(r, result)
        assert '"[red]x[/red]"' in output


class TestRichRendererStats:
    """Verify summary output."""

    def test_stats_line(self) -> None:
        console = Console(file=StringIO(), width=120)
        r = RichRenderer(console=console)
        output = _capture_stats(r, _make_result().stats)
        assert "4 facets compared" in output
        assert "1 inserted" in output
        assert "1 deleted" in output
        assert "1 changed" in output
        assert "1 unchanged" in output
