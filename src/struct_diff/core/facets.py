"""Facet enumeration: the ordered fields a structured value exposes for diffing."""

from __future__ import annotations

import dataclasses
import inspect
from enum import Enum
from types import ModuleType
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping

PRIVATE_PREFIX = "_"


@runtime_checkable
class SupportsDiffFacets(Protocol):
    """Protocol for objects that choose their own diffable fields.

    Implementations return an ordered mapping of facet name to value.
    """

    def __diff_facets__(self) -> Mapping[str, Any]:
        """Return the facets to compare, in display order."""
        ...


def is_private(name: object) -> bool:
    """Check if a facet name is private (starts with '_')."""
    return isinstance(name, str) and name.startswith(PRIVATE_PREFIX)


def _is_opaque(value: object) -> bool:
    """Values that carry a __dict__ but are never diffed field by field."""
    return isinstance(value, (type, ModuleType, Enum)) or inspect.isroutine(value)


def object_facets(value: object, *, include_private: bool = False) -> dict[str, Any] | None:
    """Return the ordered facets of a structured object, or None for scalars.

    Lookup order:
    - ``__diff_facets__()`` when the object implements SupportsDiffFacets
    - dataclass fields in declared order
    - the instance ``__dict__`` in insertion order

    Private names are dropped unless include_private is set. A value left
    with no facets is treated as a scalar.

    Args:
        value: Any Python value.
        include_private: Keep names starting with an underscore.

    Returns:
        An ordered dict of facet name to value, or None if the value is
        not a structured object.
    """
    if _is_opaque(value):
        return None

    if isinstance(value, SupportsDiffFacets):
        facets = dict(value.__diff_facets__())
    elif dataclasses.is_dataclass(value):
        facets = {field.name: getattr(value, field.name) for field in dataclasses.fields(value)}
    else:
        try:
            facets = dict(vars(value))
        except TypeError:
            return None

    if not include_private:
        facets = {name: item for name, item in facets.items() if not is_private(name)}
    return facets or None
