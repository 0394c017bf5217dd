"""
Core type definitions for the formtree control tree.

This module contains the type aliases shared by every control variant:
error maps, the two validator shapes and path segments.
"""

from collections.abc import Awaitable, Callable, Sequence
from enum import Enum
from typing import TYPE_CHECKING, Any, TypeAlias

if TYPE_CHECKING:
    from formtree.controls.base import Control

ErrorMap: TypeAlias = dict[str, Any]

SyncValidator: TypeAlias = Callable[["Control"], ErrorMap | None]

AsyncValidator: TypeAlias = Callable[["Control"], Awaitable[ErrorMap | None]]

PathSegment: TypeAlias = str | int

ControlPath: TypeAlias = Sequence[PathSegment] | str

DEFAULT_PATH_DELIMITER = "."


class ControlStatus(Enum):
    """Validity status of a control."""

    VALID = "VALID"
    INVALID = "INVALID"
    PENDING = "PENDING"  # async validation in flight
    DISABLED = "DISABLED"  # exempt from ancestor value and validity
