"""CLI entry point for struct-diff."""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Annotated, Any

import typer

from struct_diff.core.differ import Differ
from struct_diff.core.errors import StructDiffError
from struct_diff.core.filtering import FilterConfig
from struct_diff.core.models import OutputMode
from struct_diff.output.rich_output import RichRenderer

if TYPE_CHECKING:
    from struct_diff.output.base import Renderer

app = typer.Typer(
    name="struct-diff",
    help="Show the structural difference between two JSON or TOML documents.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

_LOADERS = {
    ".json": json.loads,
    ".toml": tomllib.loads,
}


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from struct_diff import __version__

        typer.echo(f"struct-diff {__version__}")
        raise typer.Exit()


def _parse_output_mode(value: str) -> OutputMode:
    """Parse output string to OutputMode enum."""
    try:
        return OutputMode(value)
    except ValueError:
        valid = ", ".join(o.value for o in OutputMode)
        msg = f"Invalid output mode '{value}'. Choose from: {valid}"
        raise typer.BadParameter(msg) from None


def _load_document(path: Path) -> Any:
    """Load a JSON or TOML document, chosen by file suffix.

    Raises:
        FileNotFoundError: If path does not exist.
        ValueError: If the suffix is unsupported or the document is invalid.
    """
    if not path.is_file():
        msg = f"Path does not exist or is not a file: {path}"
        raise FileNotFoundError(msg)

    loader = _LOADERS.get(path.suffix.lower())
    if loader is None:
        valid = ", ".join(sorted(_LOADERS))
        msg = f"Unsupported file type '{path.suffix}' for {path}. Choose from: {valid}"
        raise ValueError(msg)

    return loader(path.read_text(encoding="utf-8"))


def _configure_logging(verbose: bool) -> None:
    """Send debug logging to stderr through Rich when verbose."""
    if not verbose:
        return
    from rich.console import Console
    from rich.logging import RichHandler

    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _get_renderer(output_mode: OutputMode) -> Renderer:
    """Get the appropriate renderer for the output mode.

    Args:
        output_mode: The output mode to use.

    Returns:
        A renderer instance.
    """
    if output_mode == OutputMode.json:
        from struct_diff.output.json_output import JsonRenderer

        return JsonRenderer()
    if output_mode == OutputMode.plain:
        from struct_diff.output.plain_output import PlainRenderer

        return PlainRenderer()
    return RichRenderer()


@app.command()
def main(
    expected: Annotated[
        Path,
        typer.Argument(help="Expected document (.json or .toml)."),
    ],
    actual: Annotated[
        Path,
        typer.Argument(help="Actual document (.json or .toml)."),
    ],
    output: Annotated[
        str,
        typer.Option("--output", "-o", help="Output mode: rich, plain, or json."),
    ] = "rich",
    ignore: Annotated[
        list[str] | None,
        typer.Option("--ignore", "-i", help="Gitignore-style pattern(s) of facet paths to skip."),
    ] = None,
    stat: Annotated[
        bool,
        typer.Option("--stat", help="Show only summary statistics."),
    ] = False,
    indent: Annotated[
        int,
        typer.Option("--indent", help="Spaces per nesting level.", min=1),
    ] = 2,
    max_depth: Annotated[
        int,
        typer.Option("--max-depth", help="Deepest nesting level to compare.", min=1),
    ] = 64,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log differ decisions to stderr."),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """Compare two documents facet by facet.

    Markers: [green]+[/green] inserted, [red]-[/red] deleted,
    [yellow]~[/yellow] changed.
    """
    _configure_logging(verbose)

    try:
        output_mode = _parse_output_mode(output)
        expected_value = _load_document(expected)
        actual_value = _load_document(actual)

        differ = Differ(
            filter_config=FilterConfig(ignore_patterns=tuple(ignore) if ignore else ()),
            indent_width=indent,
            max_depth=max_depth,
        )

        result = differ.compare(expected_value, actual_value)

        renderer = _get_renderer(output_mode)
        if stat:
            renderer.render_stats(result.stats)
        else:
            renderer.render(result)

    except (FileNotFoundError, ValueError, StructDiffError) as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=2) from None
