"""
Scalar terminal control.
"""

from collections.abc import Callable
from typing import Any

from formtree.controls.base import Control
from formtree.core.options import coerce_to_async_validators, coerce_to_validators
from formtree.core.types import PathSegment
from formtree.models import is_boxed_value, unbox


class LeafControl(Control):
    """
    A control holding a single value and no children.

    Params:
        form_state: Initial value, or a boxed state (`BoxedValue` or a
            `{"value": ..., "disabled": ...}` mapping) that also sets the
            disabled flag
        validator_or_opts: Sync validator(s) or a `ControlOptions`
        async_validator: Async validator(s), ignored when options are given
    """

    def __init__(
        self,
        form_state: Any = None,
        validator_or_opts: Any = None,
        async_validator: Any = None,
    ):
        super().__init__(
            coerce_to_validators(validator_or_opts),
            coerce_to_async_validators(async_validator, validator_or_opts),
        )
        self._pending_value: Any = None
        self._pending_change = False
        self._apply_form_state(form_state)
        self.update_value_and_validity()

    def set_value(self, value: Any) -> None:
        """Set a new value, mark the control dirty and re-validate."""
        self._value = self._pending_value = value
        self._pending_change = True
        self.mark_as_dirty()
        self.update_value_and_validity()

    def reset(self, form_state: Any = None) -> None:
        """
        Reset to `form_state` and mark the control pristine.

        Params:
            form_state: Raw value or boxed state, as accepted by the constructor
        """
        self._apply_form_state(form_state)
        self.mark_as_pristine()
        self._pending_change = False
        self.update_value_and_validity()

    def get_raw_value(self) -> Any:
        return self._value

    def _apply_form_state(self, form_state: Any) -> None:
        if is_boxed_value(form_state):
            boxed = unbox(form_state)
            self._value = self._pending_value = boxed.value
            if boxed.disabled:
                self.disable()
            else:
                self.enable()
        else:
            self._value = self._pending_value = form_state

    def _update_value(self) -> None:
        pass

    def _for_each_child(self, fn: Callable[[Control, PathSegment], Any]) -> None:
        pass

    def _any_controls(self, condition: Callable[[Control], bool]) -> bool:
        return False

    def _all_controls_disabled(self) -> bool:
        return self.disabled

    def _sync_pending_controls(self) -> bool:
        return False

    def _get_child(self, segment: PathSegment) -> Control | None:
        return None
