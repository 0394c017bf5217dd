"""
Core formtree components.

This package provides the type definitions, path resolution and per-control
configuration shared by every control variant.
"""

from formtree.core.options import (
    ControlOptions,
    as_validator_list,
    coerce_to_async_validators,
    coerce_to_validators,
)
from formtree.core.path_utils import PathComponents, PathResolver
from formtree.core.types import (
    DEFAULT_PATH_DELIMITER,
    AsyncValidator,
    ControlPath,
    ControlStatus,
    ErrorMap,
    PathSegment,
    SyncValidator,
)

__all__ = [
    "ControlOptions",
    "as_validator_list",
    "coerce_to_validators",
    "coerce_to_async_validators",
    "PathComponents",
    "PathResolver",
    "DEFAULT_PATH_DELIMITER",
    "AsyncValidator",
    "ControlPath",
    "ControlStatus",
    "ErrorMap",
    "PathSegment",
    "SyncValidator",
]
