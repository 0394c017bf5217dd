from collections.abc import Mapping
from typing import Any

from attrs import frozen
from pydantic import BaseModel


@frozen
class BoxedValue:
    """Initial leaf state carrying both a value and its disabled flag."""

    value: Any = None
    disabled: bool = False


def is_boxed_value(form_state: Any) -> bool:
    """Check whether a form state is boxed.

    A boxed state is either a `BoxedValue` or a mapping with exactly the keys
    `value` and `disabled`.
    """
    if isinstance(form_state, BoxedValue):
        return True
    return isinstance(form_state, Mapping) and set(form_state.keys()) == {
        "value",
        "disabled",
    }


def unbox(form_state: Any) -> BoxedValue:
    """Convert a boxed form state into a `BoxedValue`."""
    if isinstance(form_state, BoxedValue):
        return form_state
    return BoxedValue(value=form_state["value"], disabled=bool(form_state["disabled"]))


class FormValidateResult(BaseModel):
    """Outcome of validating a whole form, as reported to UI bindings."""

    valid: bool
    invalid: bool
    message: str | None = None
