"""
formtree exception classes.

This package provides all exception types raised by control trees.
"""

from formtree.exceptions.core import (
    ControlOwnershipError,
    EmptyCollectionError,
    FormTreeError,
    InvalidValidatorError,
    MissingControlError,
)

__all__ = [
    "FormTreeError",
    "MissingControlError",
    "EmptyCollectionError",
    "ControlOwnershipError",
    "InvalidValidatorError",
]
