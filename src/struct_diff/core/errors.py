"""Exceptions raised while diffing and rendering."""

from __future__ import annotations


class StructDiffError(Exception):
    """Base class for every struct-diff failure."""


class NoApplicableDifferError(StructDiffError):
    """Raised when no registered sequencer applies to a pair of values."""


class NoApplicableFormatterError(NoApplicableDifferError):
    """Raised when no registered diff formatter applies to an operation sequence."""


class MaxDepthExceededError(StructDiffError):
    """Raised when nesting goes deeper than the configured limit.

    Usually a sign of a cyclic object graph.
    """

    def __init__(self, max_depth: int, path: tuple[object, ...] = ()) -> None:
        self.max_depth = max_depth
        self.path = path
        location = "/".join(str(key) for key in path) or "<root>"
        super().__init__(f"Maximum diff depth of {max_depth} exceeded at {location}")


class MalformedNodeTreeError(StructDiffError):
    """Raised when a prelude is left with no following line to attach to."""
