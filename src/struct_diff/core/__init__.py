"""Public API for struct_diff.core."""

from __future__ import annotations

from struct_diff.core.differ import Differ, diff, fallback_lines
from struct_diff.core.errors import (
    MalformedNodeTreeError,
    MaxDepthExceededError,
    NoApplicableDifferError,
    NoApplicableFormatterError,
    StructDiffError,
)
from struct_diff.core.facets import SupportsDiffFacets, object_facets
from struct_diff.core.filtering import FacetFilter, FilterConfig
from struct_diff.core.formatters import (
    DiffFormatter,
    MappingDiffFormatter,
    ObjectDiffFormatter,
    SequenceDiffFormatter,
    SetDiffFormatter,
    ValueDiffFormatter,
)
from struct_diff.core.models import (
    MISSING,
    DiffResult,
    DiffStats,
    Operation,
    OperationName,
    OperationSequence,
    OutputMode,
    SequenceKind,
)
from struct_diff.core.registry import StrategyRegistry
from struct_diff.core.sequencers import (
    MappingSequencer,
    ObjectSequencer,
    OperationalSequencer,
    SequenceSequencer,
    SetSequencer,
)

__all__ = [
    "MISSING",
    "DiffFormatter",
    "DiffResult",
    "DiffStats",
    "Differ",
    "FacetFilter",
    "FilterConfig",
    "MalformedNodeTreeError",
    "MappingDiffFormatter",
    "MappingSequencer",
    "MaxDepthExceededError",
    "NoApplicableDifferError",
    "NoApplicableFormatterError",
    "ObjectDiffFormatter",
    "ObjectSequencer",
    "Operation",
    "OperationName",
    "OperationSequence",
    "OperationalSequencer",
    "OutputMode",
    "SequenceDiffFormatter",
    "SequenceKind",
    "SequenceSequencer",
    "SetDiffFormatter",
    "SetSequencer",
    "StrategyRegistry",
    "StructDiffError",
    "SupportsDiffFacets",
    "ValueDiffFormatter",
    "diff",
    "fallback_lines",
    "object_facets",
]
