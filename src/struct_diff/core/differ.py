"""Differ: the composition root that chains sequencing, formatting and rendering."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from struct_diff.core.errors import NoApplicableFormatterError
from struct_diff.core.filtering import FacetFilter, FilterConfig
from struct_diff.core.formatters import BUILTIN_DIFF_FORMATTERS, FormatterContext
from struct_diff.core.models import DiffResult, DiffStats
from struct_diff.core.registry import StrategyRegistry
from struct_diff.core.sequencers import BUILTIN_SEQUENCERS, SequencerContext
from struct_diff.inspection.builders import DEFAULT_MAX_DEPTH, Inspector
from struct_diff.inspection.nodes import render_lines

if TYPE_CHECKING:
    from collections.abc import Iterable

    from struct_diff.core.formatters import DiffFormatter
    from struct_diff.core.models import OperationSequence
    from struct_diff.core.sequencers import OperationalSequencer
    from struct_diff.inspection.builders import InspectionTreeBuilder
    from struct_diff.inspection.nodes import Node

logger = logging.getLogger(__name__)

DEFAULT_INDENT_WIDTH = 2


class Differ:
    """Turns two values into ready-to-print diff lines.

    Chains: sequencer registry -> OperationalSequencer -> formatter registry
    -> DiffFormatter -> node tree -> lines.

    Both registries are built once here, with the caller's extra classes
    ahead of the built-ins, and passed down by reference.
    """

    def __init__(
        self,
        *,
        extra_operational_sequencer_classes: Iterable[type[OperationalSequencer]] = (),
        extra_diff_formatter_classes: Iterable[type[DiffFormatter]] = (),
        extra_tree_builder_classes: Iterable[type[InspectionTreeBuilder]] = (),
        filter_config: FilterConfig | None = None,
        indent_width: int = DEFAULT_INDENT_WIDTH,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        """Initialize the differ.

        Args:
            extra_operational_sequencer_classes: Sequencers tried before the
                built-ins.
            extra_diff_formatter_classes: Formatters tried before the built-ins.
            extra_tree_builder_classes: Value inspectors tried before the
                built-ins, used for every value shown in the diff.
            filter_config: Facet filtering rules. Defaults to FilterConfig().
            indent_width: Spaces per nesting level in rendered lines.
            max_depth: Deepest nesting level compared or rendered.
        """
        self._filter_config = filter_config or FilterConfig()
        self._indent_width = indent_width
        self._max_depth = max_depth

        self._sequencer_context = SequencerContext(
            registry=StrategyRegistry(
                BUILTIN_SEQUENCERS,
                extras=extra_operational_sequencer_classes,
            ),
            facet_filter=FacetFilter(self._filter_config),
            max_depth=max_depth,
        )
        self._formatter_context = FormatterContext(
            registry=StrategyRegistry(
                BUILTIN_DIFF_FORMATTERS,
                extras=extra_diff_formatter_classes,
                error_class=NoApplicableFormatterError,
            ),
            inspector=Inspector(
                filter_config=self._filter_config,
                max_depth=max_depth,
                extra_tree_builder_classes=extra_tree_builder_classes,
            ),
        )

    @property
    def inspector(self) -> Inspector:
        return self._formatter_context.inspector

    def call(self, expected: Any, actual: Any, *, indent_level: int = 0) -> list[str]:
        """Diff two values and return the rendered lines.

        Raises:
            NoApplicableDifferError: If no sequencer applies to the pair.
            MaxDepthExceededError: If the values nest deeper than max_depth.
        """
        return self.render(self.operations(expected, actual), indent_level=indent_level)

    def compare(self, expected: Any, actual: Any, *, indent_level: int = 0) -> DiffResult:
        """Diff two values and return operations, lines and stats together."""
        sequence = self.operations(expected, actual)
        return DiffResult(
            operations=sequence,
            lines=tuple(self.render(sequence, indent_level=indent_level)),
            stats=DiffStats.from_sequence(sequence),
        )

    def operations(self, expected: Any, actual: Any) -> OperationSequence:
        """Run the applicable sequencer over the two values."""
        context = self._sequencer_context
        sequencer_class = context.registry.select(expected, actual)
        sequence = sequencer_class(expected, actual, context).call()
        logger.debug(
            "%s produced %d operations for %s",
            sequencer_class.__name__,
            len(sequence.operations),
            sequence.value_class.__name__,
        )
        return sequence

    def format(self, sequence: OperationSequence) -> Node:
        """Build the node tree for an operation sequence."""
        return self._formatter_context.format(sequence)

    def render(self, sequence: OperationSequence, *, indent_level: int = 0) -> list[str]:
        """Format and flatten an operation sequence into lines."""
        return render_lines(
            self.format(sequence),
            indent_level=indent_level,
            indent_width=self._indent_width,
        )


def diff(
    expected: Any,
    actual: Any,
    *,
    extra_operational_sequencer_classes: Iterable[type[OperationalSequencer]] = (),
    extra_diff_formatter_classes: Iterable[type[DiffFormatter]] = (),
    extra_tree_builder_classes: Iterable[type[InspectionTreeBuilder]] = (),
    filter_config: FilterConfig | None = None,
    indent_width: int = DEFAULT_INDENT_WIDTH,
    max_depth: int = DEFAULT_MAX_DEPTH,
    indent_level: int = 0,
) -> list[str]:
    """Diff two values with a one-off Differ and return the rendered lines."""
    differ = Differ(
        extra_operational_sequencer_classes=extra_operational_sequencer_classes,
        extra_diff_formatter_classes=extra_diff_formatter_classes,
        extra_tree_builder_classes=extra_tree_builder_classes,
        filter_config=filter_config,
        indent_width=indent_width,
        max_depth=max_depth,
    )
    return differ.call(expected, actual, indent_level=indent_level)


def fallback_lines(expected: Any, actual: Any, *, inspector: Inspector | None = None) -> list[str]:
    """Plain two-line representation for when a structural diff is unavailable."""
    inspector = inspector or Inspector()
    return [
        f"Expected: {inspector.inline(expected)}",
        f"  Actual: {inspector.inline(actual)}",
    ]
