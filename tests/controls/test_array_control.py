"""
Tests for ArrayControl.

Focus Areas:
1. Positional value aggregation and order preservation
2. Structural mutators (push/insert/remove_at/set_control/clear)
3. Strict positional set_value
"""

import pytest

from formtree import (
    ArrayControl,
    ControlOwnershipError,
    EmptyCollectionError,
    LeafControl,
    MissingControlError,
)
from formtree.validators import required


@pytest.fixture
def letters():
    return ArrayControl([LeafControl("a"), LeafControl("b"), LeafControl("c")])


class TestNamesScenario:
    """Test the two-name array walkthrough."""

    def test_set_value_then_clear(self):
        names = ArrayControl([LeafControl(""), LeafControl("")])
        names.set_value(["Nancy", "Drew"])
        assert names.get_raw_value() == ["Nancy", "Drew"]
        assert names.value == ["Nancy", "Drew"]

        names.clear()
        assert names.length == 0
        assert len(names) == 0
        assert names.value == []


class TestAggregate:
    """Test aggregate value and status."""

    def test_disabled_child_filtered_in_order(self, letters):
        letters.at(1).disable()
        assert letters.value == ["a", "c"]
        assert letters.get_raw_value() == ["a", "b", "c"]

    def test_disabled_array_includes_everything(self, letters):
        letters.at(0).disable()
        letters.disable()
        assert letters.value == ["a", "b", "c"]
        assert all(letters.at(i).disabled for i in range(3))

    def test_invalid_child(self):
        array = ArrayControl([LeafControl("x"), LeafControl("", required)])
        assert array.invalid

    def test_invalid_disabled_child_ignored(self):
        array = ArrayControl([LeafControl("x"), LeafControl("", required)])
        array.at(1).disable()
        assert array.valid


class TestAccess:
    """Test positional access."""

    def test_at(self, letters):
        assert letters.at(0).value == "a"
        assert letters.at(-1).value == "c"
        assert letters.at(3) is None
        assert letters.at(-4) is None

    def test_get_by_position(self, letters):
        assert letters.get("2").value == "c"
        assert letters.get([0]).value == "a"
        assert letters.get("x") is None


class TestMutators:
    """Test structural mutators."""

    def test_push(self, letters):
        calls = []
        letters.register_on_collection_change(lambda: calls.append("changed"))
        control = LeafControl("d")
        letters.push(control)
        assert letters.value == ["a", "b", "c", "d"]
        assert control.parent is letters
        assert calls == ["changed"]

    def test_insert(self, letters):
        control = LeafControl("z")
        letters.insert(1, control)
        assert letters.value == ["a", "z", "b", "c"]
        assert control.parent is letters

    def test_remove_at(self, letters):
        removed = letters.at(0)
        letters.remove_at(0)
        assert letters.value == ["b", "c"]
        assert removed.parent is None

    def test_remove_at_out_of_range(self, letters):
        letters.remove_at(10)
        assert letters.length == 3

    def test_set_control(self, letters):
        old = letters.at(1)
        new = LeafControl("B")
        letters.set_control(1, new)
        assert letters.value == ["a", "B", "c"]
        assert old.parent is None
        assert new.parent is letters

    def test_set_control_negative_index(self, letters):
        letters.set_control(-1, LeafControl("C"))
        assert letters.value == ["a", "b", "C"]

    def test_set_control_none_removes(self, letters):
        letters.set_control(0, None)
        assert letters.value == ["b", "c"]

    def test_mutation_revalidates(self, letters):
        letters.push(LeafControl("", required))
        assert letters.invalid
        letters.remove_at(-1)
        assert letters.valid

    def test_clear_detaches(self, letters):
        children = list(letters.controls)
        letters.clear()
        assert all(child.parent is None for child in children)

    def test_clear_empty_is_noop(self):
        calls = []
        array = ArrayControl([])
        array.register_on_collection_change(lambda: calls.append("changed"))
        array.clear()
        assert calls == []

    def test_shared_child_rejected(self, letters):
        other = ArrayControl([])
        with pytest.raises(ControlOwnershipError):
            other.push(letters.at(0))
        assert other.length == 0


class TestSetValue:
    """Test ArrayControl.set_value and reset."""

    def test_too_many_values(self, letters):
        with pytest.raises(MissingControlError) as exc_info:
            letters.set_value(["x", "y", "z", "w"])
        assert exc_info.value.key == 3
        assert letters.value == ["a", "b", "c"]
        assert letters.pristine

    def test_empty_array(self):
        array = ArrayControl([])
        with pytest.raises(EmptyCollectionError):
            array.set_value(["x"])
        array.set_value([])
        assert array.value == []

    def test_shorter_values(self, letters):
        letters.set_value(["x"])
        assert letters.value == ["x", "b", "c"]
        assert letters.dirty

    def test_reset(self, letters):
        letters.set_value(["x", "y", "z"])
        letters.reset(["q"])
        assert letters.value == ["q", None, None]
        assert letters.pristine

    def test_nested_overflow_fails_without_changes(self):
        rows = ArrayControl(
            [ArrayControl([LeafControl(1)]), ArrayControl([LeafControl(2)])]
        )
        with pytest.raises(MissingControlError) as exc_info:
            rows.set_value([[10], [20, 30]])
        assert exc_info.value.key == 1
        assert rows.value == [[1], [2]]
        assert rows.get("0.0").value == 1
        assert rows.pristine

    def test_sync_pending_controls(self, letters):
        assert letters._sync_pending_controls() is False
