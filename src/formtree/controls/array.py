"""
Composite control keyed by position.
"""

import logging
from collections.abc import Callable, Iterable, Sequence
from typing import Any

from formtree.controls.base import Control
from formtree.core.options import coerce_to_async_validators, coerce_to_validators
from formtree.core.types import PathSegment
from formtree.exceptions import EmptyCollectionError, MissingControlError

logger = logging.getLogger(__name__)


class ArrayControl(Control):
    """
    A composite whose value is the ordered list of its children's values.

    The aggregate `value` skips disabled children (keeping the relative order
    of the others) unless the array itself is disabled; `get_raw_value()`
    always holds every child.

    Example:
        >>> names = ArrayControl([LeafControl(""), LeafControl("")])
        >>> names.set_value(["Nancy", "Drew"])
        >>> names.get_raw_value()
        ['Nancy', 'Drew']
        >>> names.clear()
        >>> names.length
        0

    Params:
        controls: Initial children; each becomes owned by this array
        validator_or_opts: Sync validator(s) or a `ControlOptions`
        async_validator: Async validator(s), ignored when options are given
    """

    def __init__(
        self,
        controls: Iterable[Control] | None = None,
        validator_or_opts: Any = None,
        async_validator: Any = None,
    ):
        super().__init__(
            coerce_to_validators(validator_or_opts),
            coerce_to_async_validators(async_validator, validator_or_opts),
        )
        self.controls: list[Control] = []
        for index, control in enumerate(controls or []):
            self._adopt(control, index)
            self.controls.append(control)
        self._update_pristine()
        self.update_value_and_validity()

    def __len__(self) -> int:
        return len(self.controls)

    @property
    def length(self) -> int:
        return len(self.controls)

    # Structure

    def at(self, index: int) -> Control | None:
        """Return the child at `index`, or None when out of range."""
        if -len(self.controls) <= index < len(self.controls):
            return self.controls[index]
        return None

    def push(self, control: Control) -> None:
        """Append a child, re-validate and notify."""
        self._adopt(control, len(self.controls))
        self.controls.append(control)
        self._after_structural_change("push")

    def insert(self, index: int, control: Control) -> None:
        """Insert a child before `index` (list.insert semantics), re-validate and notify."""
        self._adopt(control, index)
        self.controls.insert(index, control)
        self._after_structural_change(f"insert at {index}")

    def remove_at(self, index: int) -> None:
        """Detach the child at `index` if present, re-validate and notify."""
        control = self.at(index)
        if control is not None:
            del self.controls[index]
            self._release(control)
        self._after_structural_change(f"remove at {index}")

    def set_control(self, index: int, control: Control | None) -> None:
        """Replace the child at `index`; None only removes it."""
        existing = self.at(index)
        if control is not None and control is not existing:
            self._ensure_adoptable(control, index)

        position = index + len(self.controls) if index < 0 else index
        if existing is not None:
            del self.controls[position]
            self._release(existing)
        if control is not None:
            self._adopt(control, index)
            self.controls.insert(position, control)
        self._after_structural_change(f"set at {index}")

    def clear(self) -> None:
        """Detach every child. Does nothing on an empty array."""
        if not self.controls:
            return
        for control in self.controls:
            self._release(control)
        self.controls.clear()
        self._after_structural_change("clear")

    # Values

    def set_value(self, value: Sequence[Any]) -> None:
        """
        Set child values positionally, then re-validate the array.

        Every index, including those of nested composites, is checked before
        any child is touched. A shorter `value` leaves the trailing children
        unchanged.

        Params:
            value: Sequence of new child values

        Raises:
            EmptyCollectionError: If no child is registered yet
            MissingControlError: If a value at any depth has no control at its position
        """
        self._check_value_shape(value)
        for index, child_value in enumerate(value):
            self.controls[index].set_value(child_value)
        self.update_value_and_validity()

    def reset(self, value: Sequence[Any] | None = None) -> None:
        """Reset children positionally; positions beyond `value` reset to None."""
        value = value or []
        for index, control in enumerate(list(self.controls)):
            control.reset(value[index] if index < len(value) else None)
        self.mark_as_pristine()
        self.update_value_and_validity()

    def get_raw_value(self) -> list[Any]:
        return [control.get_raw_value() for control in self.controls]

    def _check_value_shape(self, value: Sequence[Any]) -> None:
        for index, child_value in enumerate(value):
            self._throw_if_control_missing(index)
            self.controls[index]._check_value_shape(child_value)

    def _throw_if_control_missing(self, index: int) -> None:
        if not self.controls:
            raise EmptyCollectionError("array")
        if self.at(index) is None:
            raise MissingControlError(index, "array")

    # Hooks

    def _update_value(self) -> None:
        self._value = [
            control.value
            for control in self.controls
            if control.enabled or self.disabled
        ]

    def _for_each_child(self, fn: Callable[[Control, PathSegment], Any]) -> None:
        for index, control in enumerate(list(self.controls)):
            fn(control, index)

    def _any_controls(self, condition: Callable[[Control], bool]) -> bool:
        return any(control.enabled and condition(control) for control in self.controls)

    def _all_controls_disabled(self) -> bool:
        if any(control.enabled for control in self.controls):
            return False
        return bool(self.controls) or self.disabled

    def _sync_pending_controls(self) -> bool:
        subtree_updated = False
        for control in self.controls:
            if control._sync_pending_controls():
                subtree_updated = True
        if subtree_updated:
            logger.debug(f"Pending values synced below {self!r}")
            self.update_value_and_validity()
        return subtree_updated

    def _get_child(self, segment: PathSegment) -> Control | None:
        try:
            index = int(segment)
        except (TypeError, ValueError):
            return None
        return self.at(index)
