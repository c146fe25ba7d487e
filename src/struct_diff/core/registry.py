"""Ordered, predicate-based strategy selection."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from struct_diff.core.errors import NoApplicableDifferError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

logger = logging.getLogger(__name__)


S = TypeVar("S", bound=type)


class StrategyRegistry(Generic[S]):
    """Selects the first strategy whose applies_to predicate holds.

    Strategies are tried in registration order, so the most specific ones
    go first. Extra strategies supplied by a caller are placed ahead of the
    built-ins and therefore win over them.
    """

    def __init__(
        self,
        builtins: Iterable[S],
        *,
        extras: Iterable[S] = (),
        error_class: type[NoApplicableDifferError] = NoApplicableDifferError,
    ) -> None:
        """Initialize the registry.

        Args:
            builtins: Built-in strategy classes, most specific first.
            extras: Caller-supplied strategy classes, tried before builtins.
            error_class: Exception raised by select() when nothing applies.
        """
        self._strategies: tuple[S, ...] = (*extras, *builtins)
        self._error_class = error_class

    def __iter__(self) -> Iterator[S]:
        return iter(self._strategies)

    def __len__(self) -> int:
        return len(self._strategies)

    def find(self, *values: Any) -> S | None:
        """Return the first applicable strategy, or None."""
        for strategy in self._strategies:
            if strategy.applies_to(*values):
                return strategy
        return None

    def select(self, *values: Any) -> S:
        """Return the first applicable strategy.

        Raises:
            NoApplicableDifferError: (or the configured subclass) if no
                registered strategy applies.
        """
        strategy = self.find(*values)
        if strategy is None:
            msg = f"No registered strategy applies to ({_type_names(values)})"
            raise self._error_class(msg)
        logger.debug("Selected %s for (%s)", strategy.__name__, _type_names(values))
        return strategy


def _type_names(values: tuple[Any, ...]) -> str:
    return ", ".join(type(value).__name__ for value in values)
