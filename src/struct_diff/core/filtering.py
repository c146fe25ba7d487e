"""Facet filtering: private attributes and gitignore-style ignore patterns."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from pathspec import GitIgnoreSpec

if TYPE_CHECKING:
    from collections.abc import Hashable

PATH_SEPARATOR = "/"


def facet_path(path: tuple[Hashable, ...]) -> str:
    """Join facet keys into a POSIX-style path.

    For ('items', 0, 'id'), returns 'items/0/id'.
    """
    return PATH_SEPARATOR.join(str(key) for key in path)


@dataclass(frozen=True)
class FilterConfig:
    """Immutable configuration for facet filtering.

    Controls which facets take part in a comparison. Private attributes
    (names starting with '_') are hidden unless include_private is set.
    ignore_patterns use .gitignore syntax against the facet path, so
    'created_at' matches at any depth and '/id' only at the root.
    """

    include_private: bool = False
    ignore_patterns: tuple[str, ...] = ()


class FacetFilter:
    """Decides whether a facet path takes part in a comparison."""

    def __init__(self, config: FilterConfig) -> None:
        """Initialize the filter with the given configuration."""
        self._config = config
        self._spec = GitIgnoreSpec.from_lines(config.ignore_patterns)

    @property
    def config(self) -> FilterConfig:
        return self._config

    @property
    def include_private(self) -> bool:
        return self._config.include_private

    def is_ignored(self, path: tuple[Hashable, ...]) -> bool:
        """Check if a facet path matches any ignore pattern. False if none defined."""
        if not self._config.ignore_patterns or not path:
            return False
        return self._spec.match_file(facet_path(path))
