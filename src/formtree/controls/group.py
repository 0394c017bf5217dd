"""
Composite control keyed by name.
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any

from formtree.controls.base import Control
from formtree.core.options import coerce_to_async_validators, coerce_to_validators
from formtree.core.types import PathSegment
from formtree.exceptions import EmptyCollectionError, MissingControlError

logger = logging.getLogger(__name__)


class GroupControl(Control):
    """
    A composite whose value is a mapping of child names to child values.

    The aggregate `value` only holds enabled children unless the group itself
    is disabled; `get_raw_value()` always holds every child.

    Params:
        controls: Initial children by name; each becomes owned by this group
        validator_or_opts: Sync validator(s) or a `ControlOptions`
        async_validator: Async validator(s), ignored when options are given
    """

    def __init__(
        self,
        controls: Mapping[str, Control] | None = None,
        validator_or_opts: Any = None,
        async_validator: Any = None,
    ):
        super().__init__(
            coerce_to_validators(validator_or_opts),
            coerce_to_async_validators(async_validator, validator_or_opts),
        )
        self.controls: dict[str, Control] = {}
        for name, control in (controls or {}).items():
            self.register_control(name, control)
        self._update_pristine()
        self.update_value_and_validity()

    # Structure

    def register_control(self, name: str, control: Control) -> Control:
        """
        Register a child without re-validating the group.

        Params:
            name: Child name
            control: Child control, which must not belong to another composite

        Returns:
            The control now registered under `name`; an existing control is
            returned unchanged and `control` is ignored

        Raises:
            ControlOwnershipError: If `control` already has a parent
        """
        if name in self.controls:
            return self.controls[name]
        self._adopt(control, name)
        self.controls[name] = control
        return control

    def add_control(self, name: str, control: Control) -> None:
        """Register a child (no-op if the name is taken), re-validate and notify."""
        self.register_control(name, control)
        self._after_structural_change(f"add '{name}'")

    def set_control(self, name: str, control: Control | None) -> None:
        """Replace the child under `name`; None only removes it."""
        existing = self.controls.get(name)
        if control is not None and control is not existing:
            self._ensure_adoptable(control, name)
        if existing is not None:
            del self.controls[name]
            self._release(existing)
        if control is not None:
            self.register_control(name, control)
        self._after_structural_change(f"set '{name}'")

    def remove_control(self, name: str) -> None:
        """Detach the child under `name` if present, re-validate and notify."""
        existing = self.controls.pop(name, None)
        if existing is not None:
            self._release(existing)
        self._after_structural_change(f"remove '{name}'")

    def contains(self, name: str) -> bool:
        """True if `name` is registered and that child is enabled."""
        return name in self.controls and self.controls[name].enabled

    # Values

    def set_value(self, value: Mapping[str, Any]) -> None:
        """
        Set the values of the named children, then re-validate the group.

        Every key, including the keys of nested composites, is checked before
        any child is touched, so a failing call leaves the tree unchanged.
        Children missing from `value` keep their current value.

        Params:
            value: Mapping of child name to new child value

        Raises:
            EmptyCollectionError: If no child is registered yet
            MissingControlError: If a key, at any depth, has no registered child
        """
        self._check_value_shape(value)
        for name, child_value in value.items():
            self.controls[name].set_value(child_value)
        self.update_value_and_validity()

    def reset(self, value: Mapping[str, Any] | None = None) -> None:
        """Reset every child to its entry in `value` (None when absent)."""
        value = value or {}
        for name, control in list(self.controls.items()):
            control.reset(value.get(name))
        self.mark_as_pristine()
        self.update_value_and_validity()

    def get_raw_value(self) -> dict[str, Any]:
        return {name: control.get_raw_value() for name, control in self.controls.items()}

    def _check_value_shape(self, value: Mapping[str, Any]) -> None:
        for name, child_value in value.items():
            self._throw_if_control_missing(name)
            self.controls[name]._check_value_shape(child_value)

    def _throw_if_control_missing(self, name: str) -> None:
        if not self.controls:
            raise EmptyCollectionError("group")
        if name not in self.controls:
            raise MissingControlError(name, "group")

    # Hooks

    def _update_value(self) -> None:
        self._value = {
            name: control.value
            for name, control in self.controls.items()
            if control.enabled or self.disabled
        }

    def _for_each_child(self, fn: Callable[[Control, PathSegment], Any]) -> None:
        for name, control in list(self.controls.items()):
            fn(control, name)

    def _any_controls(self, condition: Callable[[Control], bool]) -> bool:
        return any(
            self.contains(name) and condition(control)
            for name, control in self.controls.items()
        )

    def _all_controls_disabled(self) -> bool:
        if any(control.enabled for control in self.controls.values()):
            return False
        return bool(self.controls) or self.disabled

    def _sync_pending_controls(self) -> bool:
        subtree_updated = False
        for control in self.controls.values():
            if control._sync_pending_controls():
                subtree_updated = True
        if subtree_updated:
            logger.debug(f"Pending values synced below {self!r}")
            self.update_value_and_validity()
        return subtree_updated

    def _get_child(self, segment: PathSegment) -> Control | None:
        return self.controls.get(str(segment))
