"""
Tests for LeafControl.

Focus Areas:
1. Raw and boxed construction
2. set_value / reset and the dirty flag
3. Sync validator merging and set_errors
"""

import pytest

from formtree import BoxedValue, ControlStatus, InvalidValidatorError, LeafControl
from formtree.validators import required


class TestConstruction:
    """Test raw and boxed initial state."""

    def test_raw_value(self):
        control = LeafControl("Nancy")
        assert control.value == "Nancy"
        assert control.status is ControlStatus.VALID
        assert control.errors is None
        assert control.pristine is True
        assert control.dirty is False
        assert control.parent is None
        assert control.root is control

    def test_default_value(self):
        assert LeafControl().value is None

    def test_boxed_mapping_disabled(self):
        """Test that a {value, disabled} mapping sets both."""
        control = LeafControl({"value": "a", "disabled": True})
        assert control.value == "a"
        assert control.disabled
        assert control.status is ControlStatus.DISABLED

    def test_boxed_value_enabled(self):
        control = LeafControl(BoxedValue("a"))
        assert control.value == "a"
        assert control.enabled

    def test_mapping_with_extra_keys_is_raw(self):
        """Test that only exactly {value, disabled} counts as boxed."""
        state = {"value": 1, "disabled": False, "label": "x"}
        control = LeafControl(state)
        assert control.value == state

    def test_disabled_control_skips_validators(self):
        control = LeafControl({"value": "", "disabled": True}, required)
        assert control.errors is None
        assert control.disabled


class TestSetValue:
    """Test value changes."""

    def test_set_value_marks_dirty(self):
        control = LeafControl("a")
        control.set_value("b")
        assert control.value == "b"
        assert control.dirty is True
        assert control.pristine is False

    def test_set_value_revalidates(self):
        control = LeafControl("x", required)
        assert control.valid
        control.set_value("")
        assert control.invalid
        assert control.errors == {"required": True}
        control.set_value("y")
        assert control.valid
        assert control.errors is None

    def test_set_value_advances_generation(self):
        control = LeafControl("a")
        before = control.generation
        control.set_value("b")
        assert control.generation == before + 1


class TestReset:
    """Test reset semantics."""

    def test_reset_to_value(self):
        control = LeafControl("a")
        control.set_value("b")
        control.reset("z")
        assert control.value == "z"
        assert control.pristine is True
        assert control.dirty is False

    def test_reset_default(self):
        control = LeafControl("a")
        control.reset()
        assert control.value is None

    def test_reset_boxed(self):
        """Test that reset applies the disabled flag of a boxed state."""
        control = LeafControl("a")
        control.reset({"value": "q", "disabled": True})
        assert control.value == "q"
        assert control.disabled
        control.reset(BoxedValue("r", disabled=False))
        assert control.enabled
        assert control.value == "r"


class TestValidators:
    """Test sync validator handling."""

    def test_results_are_merged_in_order(self, call_log):
        def first(control):
            call_log.append("first")
            return {"a": 1, "shared": "first"}

        def silent(control):
            call_log.append("silent")
            return None

        def last(control):
            call_log.append("last")
            return {"b": 2, "shared": "last"}

        control = LeafControl("x", [first, silent, last])
        assert call_log == ["first", "silent", "last"]
        assert control.errors == {"a": 1, "b": 2, "shared": "last"}
        assert control.invalid

    def test_empty_result_is_normalized(self):
        """Test that an empty error map counts as no error."""
        control = LeafControl("x", lambda c: {})
        assert control.errors is None
        assert control.valid

    def test_set_and_clear_validators(self):
        control = LeafControl("")
        control.set_validators(required)
        assert control.validators == [required]
        control.update_value_and_validity()
        assert control.invalid

        control.set_validators(None)
        assert control.validators == []
        control.update_value_and_validity()
        assert control.valid

        control.set_validators([required])
        control.clear_validators()
        assert control.validators == []

    def test_set_async_validators(self):
        async def check(control):
            return None

        control = LeafControl("x")
        control.set_async_validators([check])
        assert control.async_validators == [check]
        control.clear_async_validators()
        assert control.async_validators == []

    def test_invalid_validator_argument(self):
        with pytest.raises(InvalidValidatorError):
            LeafControl("x").set_validators(42)


class TestSetErrors:
    """Test manual errors."""

    def test_set_errors(self):
        control = LeafControl("x")
        control.set_errors({"server": "taken"})
        assert control.invalid
        assert control.has_error("server")
        assert control.get_error("server") == "taken"
        assert control.get_error("other") is None
        assert not control.has_error("other")

    def test_clearing_errors(self):
        control = LeafControl("x")
        control.set_errors({"server": "taken"})
        control.set_errors({})
        assert control.errors is None
        assert control.valid
        control.set_errors({"server": "taken"})
        control.set_errors(None)
        assert control.valid

    def test_set_errors_does_not_run_validators(self, call_log):
        def tracking(control):
            call_log.append(control.value)
            return None

        control = LeafControl("x", tracking)
        call_log.clear()
        control.set_errors({"manual": True})
        assert call_log == []


class TestEnableDisable:
    """Test leaf enable/disable."""

    def test_enable_runs_validators(self):
        control = LeafControl({"value": "", "disabled": True}, required)
        control.enable()
        assert control.invalid
        assert control.errors == {"required": True}

    def test_disable_clears_errors(self):
        control = LeafControl("", required)
        control.disable()
        assert control.errors is None
        assert control.status is ControlStatus.DISABLED

    def test_disabled_change_listeners(self):
        changes = []
        control = LeafControl("a")
        control.register_on_disabled_change(changes.append)
        control.disable()
        control.enable()
        assert changes == [True, False]


class TestLeafHooks:
    """Test the leaf implementations of the child hooks."""

    def test_no_children(self):
        control = LeafControl("a")
        assert control.get("a") is None
        assert control.get_raw_value() == "a"
        assert control._sync_pending_controls() is False
        assert control._any_controls(lambda c: True) is False
