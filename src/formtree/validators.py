"""
Built-in synchronous validators and error-map helpers.

Every validator receives the control being validated and returns either None
(no error) or a one-entry error map keyed by the error code.
"""

import re
from collections.abc import Iterable, Sized
from typing import TYPE_CHECKING

from formtree.core.types import ErrorMap, SyncValidator

if TYPE_CHECKING:
    from formtree.controls.base import Control


def merge_errors(results: Iterable[ErrorMap | None]) -> ErrorMap | None:
    """
    Merge validator results into a single error map.

    Results are merged in order so a later validator overrides an earlier one
    on the same code. Entries whose payload is None or False are dropped.

    Params:
        results: Validator return values in registration order

    Returns:
        The merged error map, or None when nothing remains
    """
    merged: ErrorMap = {}
    for result in results:
        if result:
            merged.update(result)
    merged = {
        code: payload
        for code, payload in merged.items()
        if payload is not None and payload is not False
    }
    return merged or None


def _is_empty(value: object) -> bool:
    return value is None or (isinstance(value, Sized) and len(value) == 0)


def required(control: "Control") -> ErrorMap | None:
    """Fail when the value is None or an empty string or collection."""
    if _is_empty(control.value):
        return {"required": True}
    return None


def min_length(length: int) -> SyncValidator:
    """Build a validator requiring a sized value of at least `length` items.

    Empty values pass; combine with `required` to reject them.
    """

    def validator(control: "Control") -> ErrorMap | None:
        value = control.value
        if _is_empty(value) or not isinstance(value, Sized):
            return None
        if len(value) < length:
            return {
                "minlength": {"required_length": length, "actual_length": len(value)}
            }
        return None

    return validator


def max_length(length: int) -> SyncValidator:
    """Build a validator requiring a sized value of at most `length` items."""

    def validator(control: "Control") -> ErrorMap | None:
        value = control.value
        if not isinstance(value, Sized):
            return None
        if len(value) > length:
            return {
                "maxlength": {"required_length": length, "actual_length": len(value)}
            }
        return None

    return validator


def pattern(regex: str | re.Pattern[str]) -> SyncValidator:
    """Build a validator requiring the whole string value to match `regex`."""
    compiled = re.compile(regex) if isinstance(regex, str) else regex

    def validator(control: "Control") -> ErrorMap | None:
        value = control.value
        if _is_empty(value):
            return None
        if compiled.fullmatch(str(value)) is None:
            return {
                "pattern": {
                    "required_pattern": compiled.pattern,
                    "actual_value": value,
                }
            }
        return None

    return validator


def compose(*validators: SyncValidator) -> SyncValidator:
    """Combine several validators into one whose result is their merged errors."""

    def validator(control: "Control") -> ErrorMap | None:
        return merge_errors(v(control) for v in validators)

    return validator
