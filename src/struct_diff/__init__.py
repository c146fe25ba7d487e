"""struct-diff: structural diffs of in-memory values for test-failure output."""

from struct_diff.core import Differ, FilterConfig, diff, fallback_lines

__version__ = "0.1.0"

__all__ = ["Differ", "FilterConfig", "__version__", "diff", "fallback_lines"]
