"""
formtree - Reactive validation tree for structured form input

formtree tracks value, validity, errors and dirty state for trees of leaf,
group and array controls, re-validating them as values and structure change.
"""

from importlib.metadata import version

from formtree.builder import FormBuilder
from formtree.controls import ArrayControl, Control, GroupControl, LeafControl
from formtree.core import ControlOptions, ControlStatus
from formtree.exceptions import (
    ControlOwnershipError,
    EmptyCollectionError,
    FormTreeError,
    InvalidValidatorError,
    MissingControlError,
)
from formtree.models import BoxedValue, FormValidateResult
from formtree.summary import collect_errors, summarize

__version__ = version("formtree")

__all__ = [
    "__version__",
    "Control",
    "LeafControl",
    "GroupControl",
    "ArrayControl",
    "FormBuilder",
    "ControlOptions",
    "ControlStatus",
    "BoxedValue",
    "FormValidateResult",
    "collect_errors",
    "summarize",
    "FormTreeError",
    "MissingControlError",
    "EmptyCollectionError",
    "ControlOwnershipError",
    "InvalidValidatorError",
]
