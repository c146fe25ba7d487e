"""JSON export renderer."""

from __future__ import annotations

import dataclasses
import json
import sys
from typing import TYPE_CHECKING, Any

from struct_diff.core.models import MISSING
from struct_diff.inspection.builders import Inspector

if TYPE_CHECKING:
    from typing import TextIO

    from struct_diff.core.models import DiffResult, DiffStats, Operation, OperationSequence


class _DiffEncoder(json.JSONEncoder):
    """Custom JSON encoder for compared values.

    JSON-native values pass through. Sets become lists and anything else
    is encoded as its inline inspection string.
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._inspector = Inspector()

    def default(self, o: object) -> object:
        """Encode non-JSON values."""
        if isinstance(o, (set, frozenset)):
            return list(o)
        return self._inspector.inline(o)


def _json_key(key: Any) -> Any:
    if key is None or isinstance(key, (str, int, float, bool)):
        return key
    return Inspector().inline(key)


def operation_to_dict(operation: Operation) -> dict[str, Any]:
    """Convert an operation to a JSON-ready dict, omitting missing sides."""
    data: dict[str, Any] = {"name": operation.name, "key": _json_key(operation.key)}
    if operation.expected is not MISSING:
        data["expected"] = operation.expected
    if operation.actual is not MISSING:
        data["actual"] = operation.actual
    if operation.children is not None:
        data["children"] = sequence_to_dict(operation.children)
    return data


def sequence_to_dict(sequence: OperationSequence) -> dict[str, Any]:
    """Convert an operation sequence to a JSON-ready dict."""
    return {
        "kind": sequence.kind,
        "value_class": sequence.value_class.__name__,
        "operations": [operation_to_dict(op) for op in sequence.operations],
    }


class JsonRenderer:
    """Renders diff results as JSON to a text stream.

    Output modes:
    - render(): operation tree, rendered lines and stats
    - render_stats(): Summary DiffStats only

    Output goes to stdout by default. Pass a custom TextIO for
    file output or testing.
    """

    def __init__(self, output: TextIO | None = None, *, indent: int = 2) -> None:
        """Initialize with an optional output stream.

        Args:
            output: Text stream for JSON output. Defaults to sys.stdout.
            indent: JSON indentation level. Defaults to 2.
        """
        self._output = output or sys.stdout
        self._indent = indent

    def render(self, result: DiffResult) -> None:
        """Serialize the full diff result as JSON."""
        data = {
            "operations": sequence_to_dict(result.operations),
            "lines": list(result.lines),
            "stats": dataclasses.asdict(result.stats),
        }
        json.dump(data, self._output, cls=_DiffEncoder, indent=self._indent)
        self._output.write("\n")

    def render_stats(self, stats: DiffStats) -> None:
        """Serialize summary statistics as JSON."""
        data = dataclasses.asdict(stats)
        json.dump(data, self._output, cls=_DiffEncoder, indent=self._indent)
        self._output.write("\n")
