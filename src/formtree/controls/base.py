"""
Abstract base class for every node of a form control tree.

`Control` owns the state shared by leaves and composites (value, status,
errors, dirty flag, validators, parent back-reference) and the algorithm that
turns validator results and child statuses into a single status.

Status precedence, highest first:
    DISABLED  every reachable descendant (self for a leaf) is disabled
    INVALID   own sync or async validators reported errors
    PENDING   an enabled child is waiting on async validation
    INVALID   an enabled child is invalid
    VALID

Async validation rounds are guarded by a per-control generation counter.
Every call to `update_value_and_validity` advances it; a round that finds the
counter moved after one of its awaits drops its result without touching the
control.
"""

import asyncio
import inspect
import logging
import weakref
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from formtree.core.options import as_validator_list
from formtree.core.path_utils import PathResolver
from formtree.core.types import (
    DEFAULT_PATH_DELIMITER,
    AsyncValidator,
    ControlPath,
    ControlStatus,
    ErrorMap,
    PathSegment,
    SyncValidator,
)
from formtree.exceptions import ControlOwnershipError
from formtree.validators import merge_errors

logger = logging.getLogger(__name__)


def _noop() -> None:
    pass


class Control(ABC):
    """
    Base class for `LeafControl`, `GroupControl` and `ArrayControl`.

    It should not be instantiated directly. Subclasses implement the child
    hooks (`_update_value`, `_for_each_child`, `_any_controls`,
    `_all_controls_disabled`, `_sync_pending_controls`, `_get_child`) and the
    value commands (`set_value`, `reset`, `get_raw_value`).

    Params:
        validators: Sync validators run in order on every validation round
        async_validators: Async validators awaited in order once sync ones pass
    """

    def __init__(
        self,
        validators: list[SyncValidator] | None = None,
        async_validators: list[AsyncValidator] | None = None,
    ):
        self.validators: list[SyncValidator] = list(validators or [])
        self.async_validators: list[AsyncValidator] = list(async_validators or [])
        self._value: Any = None
        self._status = ControlStatus.VALID
        self._errors: ErrorMap | None = None
        self._pristine = True
        self._parent_ref: weakref.ref | None = None
        self._on_collection_change: Callable[[], None] = _noop
        self._on_disabled_change: list[Callable[[bool], None]] = []
        self._generation = 0
        self._async_tasks: set[asyncio.Task] = set()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(value={self._value!r}, status={self._status.value})"

    # State

    @property
    def value(self) -> Any:
        return self._value

    @property
    def status(self) -> ControlStatus:
        return self._status

    @property
    def errors(self) -> ErrorMap | None:
        return self._errors

    @property
    def valid(self) -> bool:
        return self._status is ControlStatus.VALID

    @property
    def invalid(self) -> bool:
        return self._status is ControlStatus.INVALID

    @property
    def pending(self) -> bool:
        return self._status is ControlStatus.PENDING

    @property
    def disabled(self) -> bool:
        return self._status is ControlStatus.DISABLED

    @property
    def enabled(self) -> bool:
        return self._status is not ControlStatus.DISABLED

    @property
    def pristine(self) -> bool:
        return self._pristine

    @property
    def dirty(self) -> bool:
        return not self._pristine

    @property
    def generation(self) -> int:
        """Number of validation rounds started on this control."""
        return self._generation

    # Tree links

    @property
    def parent(self) -> "Control | None":
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    def set_parent(self, parent: "Control | None") -> None:
        """Point the back-reference at `parent`, or clear it with None."""
        self._parent_ref = weakref.ref(parent) if parent is not None else None

    @property
    def root(self) -> "Control":
        control = self
        while control.parent is not None:
            control = control.parent
        return control

    def _ensure_adoptable(self, control: "Control", key: PathSegment) -> None:
        if control.parent is not None:
            raise ControlOwnershipError(key)

    def _adopt(self, control: "Control", key: PathSegment) -> None:
        """Make this control the parent of `control` and forward the collection-change slot."""
        self._ensure_adoptable(control, key)
        control.set_parent(self)
        control._register_on_collection_change(self._on_collection_change)

    def _release(self, control: "Control") -> None:
        """Detach a child: clear its back-reference and its collection-change slot."""
        control._register_on_collection_change(_noop)
        control.set_parent(None)

    def _after_structural_change(self, action: str) -> None:
        logger.debug(f"{type(self).__name__} {action}: {len(self._child_list())} children")
        self._update_pristine()
        self.update_value_and_validity()
        self._on_collection_change()

    # Validators

    def set_validators(self, new_validator: SyncValidator | list[SyncValidator] | None) -> None:
        """Replace the sync validators; None clears them."""
        self.validators = as_validator_list(new_validator)

    def set_async_validators(
        self, new_validator: AsyncValidator | list[AsyncValidator] | None
    ) -> None:
        """Replace the async validators; None clears them."""
        self.async_validators = as_validator_list(new_validator, "async validator")

    def clear_validators(self) -> None:
        self.validators = []

    def clear_async_validators(self) -> None:
        self.async_validators = []

    # Observers

    def register_on_collection_change(self, fn: Callable[[], None]) -> None:
        """
        Set the single collection-change slot of this control.

        The callback fires after any structural change of this control or of
        a composite below it. Composites forward the slot to their children.

        Params:
            fn: Zero-argument callback
        """
        self._register_on_collection_change(fn)

    def _register_on_collection_change(self, fn: Callable[[], None]) -> None:
        self._on_collection_change = fn
        self._for_each_child(lambda control, _key: control._register_on_collection_change(fn))

    def register_on_disabled_change(self, fn: Callable[[bool], None]) -> None:
        """Add a listener called with the new disabled flag after `disable`/`enable`."""
        self._on_disabled_change.append(fn)

    # Enable / disable

    def disable(self, only_self: bool = False) -> None:
        """
        Disable this control and every descendant.

        A disabled control has no errors and is excluded from its enabled
        ancestors' aggregate value and status.

        Params:
            only_self: When True, ancestors are not refreshed
        """
        self._status = ControlStatus.DISABLED
        self._errors = None
        self._for_each_child(lambda control, _key: control.disable(only_self=True))
        self.update_value_and_validity()
        if not only_self:
            self._update_ancestors()
        for listener in list(self._on_disabled_change):
            listener(True)

    def enable(self, only_self: bool = False) -> None:
        """
        Enable this control and every descendant, then re-validate.

        Params:
            only_self: When True, ancestors are not refreshed
        """
        self._status = ControlStatus.VALID
        self._errors = None
        self._for_each_child(lambda control, _key: control.enable(only_self=True))
        self.update_value_and_validity()
        if not only_self:
            self._update_ancestors()
        for listener in list(self._on_disabled_change):
            listener(False)

    def _update_ancestors(self) -> None:
        parent = self.parent
        if parent is not None:
            parent._update_controls_errors()
            parent._update_value()
            parent._update_ancestors()

    # Dirty / pristine

    def mark_as_dirty(self, only_self: bool = False) -> None:
        """Mark this control dirty and, unless `only_self`, every ancestor."""
        self._pristine = False
        parent = self.parent
        if parent is not None and not only_self:
            parent.mark_as_dirty()

    def mark_as_pristine(self, only_self: bool = False) -> None:
        """
        Mark this control and all descendants pristine.

        Ancestors recompute their own flag: they stay dirty while any other
        descendant is still dirty.

        Params:
            only_self: When True, ancestors are not recomputed
        """
        self._pristine = True
        self._for_each_child(lambda control, _key: control.mark_as_pristine(only_self=True))
        parent = self.parent
        if parent is not None and not only_self:
            parent._update_pristine()

    def _update_pristine(self) -> None:
        self._pristine = not self._any_controls_dirty()
        parent = self.parent
        if parent is not None:
            parent._update_pristine()

    def _any_controls_dirty(self) -> bool:
        return any(control.dirty for control in self._child_list())

    # Validation

    def update_value_and_validity(self) -> None:
        """
        Recompute value, errors and status of this control.

        Starts a new validation round: sync validators run in order, and when
        the resulting status is VALID or PENDING the async validators are
        launched. Ancestors are not recomputed.
        """
        self._generation += 1
        self._set_initial_status()
        self._update_value()

        if self.enabled:
            self._errors = self._run_validators()
            self._status = self._calculate_status()

            if self._status in (ControlStatus.VALID, ControlStatus.PENDING):
                self._run_async_validators()

    def update_tree_validity(self) -> None:
        """Re-validate every descendant bottom-up, then this control."""
        self._for_each_child(lambda control, _key: control.update_tree_validity())
        self.update_value_and_validity()

    def _set_initial_status(self) -> None:
        self._status = (
            ControlStatus.DISABLED if self._all_controls_disabled() else ControlStatus.VALID
        )

    def _run_validators(self) -> ErrorMap | None:
        return merge_errors(validator(self) for validator in list(self.validators))

    def _run_async_validators(self) -> None:
        """
        Start an async validation round.

        Inside a running event loop the round becomes a task and a failure is
        logged when the task finishes. Without a loop the round runs to
        completion here and a failure propagates to the caller. Either way the
        control stays PENDING after a failure.
        """
        if not self.async_validators:
            return

        generation = self._generation
        self._status = ControlStatus.PENDING
        validation_round = self._async_validation_round(generation)

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            asyncio.run(validation_round)
            return

        task = loop.create_task(validation_round)
        self._async_tasks.add(task)
        task.add_done_callback(self._on_async_round_done)

    async def _async_validation_round(self, generation: int) -> None:
        results: list[ErrorMap | None] = []
        for validator in list(self.async_validators):
            result = validator(self)
            if inspect.isawaitable(result):
                result = await result
            if generation != self._generation:
                logger.debug(
                    f"Discarding superseded async validation round {generation} "
                    f"(current {self._generation}) for {self!r}"
                )
                return
            results.append(result)

        self.set_errors(merge_errors(results))

    def _on_async_round_done(self, task: asyncio.Task) -> None:
        self._async_tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error(f"Async validation failed for {self!r}", exc_info=exc)

    async def wait_for_async_validation(self) -> None:
        """Wait until no async validation round of this control is in flight."""
        while True:
            in_flight = [task for task in self._async_tasks if not task.done()]
            if not in_flight:
                return
            await asyncio.gather(*in_flight, return_exceptions=True)

    def set_errors(self, errors: ErrorMap | None) -> None:
        """
        Overwrite the errors of this control and recompute its status.

        Validators are not run. An empty map is stored as None.

        Params:
            errors: Error map or None
        """
        self._errors = dict(errors) if errors else None
        self._update_controls_errors()

    def _update_controls_errors(self) -> None:
        self._status = self._calculate_status()

    def _calculate_status(self) -> ControlStatus:
        if self._all_controls_disabled():
            return ControlStatus.DISABLED
        if self._errors:
            return ControlStatus.INVALID
        if self._any_controls_have_status(ControlStatus.PENDING):
            return ControlStatus.PENDING
        if self._any_controls_have_status(ControlStatus.INVALID):
            return ControlStatus.INVALID
        return ControlStatus.VALID

    def _any_controls_have_status(self, status: ControlStatus) -> bool:
        return self._any_controls(lambda control: control.status is status)

    # Lookup

    def get(
        self, path: ControlPath | None, delimiter: str = DEFAULT_PATH_DELIMITER
    ) -> "Control | None":
        """
        Retrieve a descendant control by path.

        Params:
            path: Delimited string ("address.lines.0") or segment sequence
            delimiter: Separator used when path is a string

        Returns:
            The descendant, or None if any segment cannot be resolved
        """
        return PathResolver.find(self, path, delimiter)

    def get_error(self, error_code: str, path: ControlPath | None = None) -> Any:
        """
        Look up the payload of an error code.

        Params:
            error_code: Code to look up
            path: Descendant to inspect; this control when omitted

        Returns:
            The payload, or None when the control or the code is absent
        """
        control = self.get(path) if path else self
        if control is None or not control.errors:
            return None
        return control.errors.get(error_code)

    def has_error(self, error_code: str, path: ControlPath | None = None) -> bool:
        """Check whether the addressed control reports `error_code`."""
        control = self.get(path) if path else self
        return control is not None and bool(control.errors) and error_code in control.errors

    # Variant hooks

    @abstractmethod
    def set_value(self, value: Any) -> None: ...

    @abstractmethod
    def reset(self, value: Any = None) -> None: ...

    @abstractmethod
    def get_raw_value(self) -> Any:
        """Value including disabled descendants."""

    @abstractmethod
    def _update_value(self) -> None: ...

    @abstractmethod
    def _for_each_child(self, fn: Callable[["Control", PathSegment], Any]) -> None: ...

    @abstractmethod
    def _any_controls(self, condition: Callable[["Control"], bool]) -> bool:
        """True if any enabled child satisfies `condition`."""

    @abstractmethod
    def _all_controls_disabled(self) -> bool: ...

    @abstractmethod
    def _sync_pending_controls(self) -> bool: ...

    @abstractmethod
    def _get_child(self, segment: PathSegment) -> "Control | None": ...

    def _check_value_shape(self, value: Any) -> None:
        """
        Raise if `set_value(value)` would address a missing descendant.

        Leaves accept any value. Composites check their keys and recurse, so a
        failing `set_value` is detected before any control is touched.
        """

    def _child_list(self) -> list["Control"]:
        children: list[Control] = []
        self._for_each_child(lambda control, _key: children.append(control))
        return children
