"""
Construction of control trees from plain nested data.

`FormBuilder.group` and `FormBuilder.array` read each entry as a control
configuration:

- an existing `Control` is used as is
- a tuple `(value, validator?, async_validator?)` becomes a `LeafControl`
- a boxed mapping (`{"value": ..., "disabled": ...}`) or `BoxedValue`
  becomes a `LeafControl`
- any other mapping becomes a nested `GroupControl`
- a list becomes a nested `ArrayControl`
- anything else becomes a `LeafControl` holding that value

`FormBuilder.build` reads raw values instead: mappings become groups, lists
become arrays and everything else, tuples and boxed-looking mappings included,
is a plain value. So `FormBuilder.build(tree.get_raw_value())` reproduces the
raw value of `tree` whatever its disabled state.
"""

from collections.abc import Mapping
from typing import Any

from formtree.controls import ArrayControl, Control, GroupControl, LeafControl
from formtree.core.options import ControlOptions
from formtree.models import BoxedValue, is_boxed_value


def _group_options(options: ControlOptions | Mapping[str, Any] | None) -> ControlOptions:
    if options is None:
        return ControlOptions()
    if isinstance(options, ControlOptions):
        return options
    if "validators" in options or "async_validators" in options:
        return ControlOptions(
            validators=options.get("validators"),
            async_validators=options.get("async_validators"),
        )
    return ControlOptions(
        validators=options.get("validator"),
        async_validators=options.get("async_validator"),
    )


class FormBuilder:
    """Factory for control trees built from nested mappings, lists and tuples."""

    @classmethod
    def group(
        cls,
        controls_config: Mapping[str, Any],
        options: ControlOptions | Mapping[str, Any] | None = None,
    ) -> GroupControl:
        """
        Build a group from a mapping of child configurations.

        Params:
            controls_config: Child name to child configuration
            options: `ControlOptions`, or a mapping with `validators` /
                `async_validators` (or the singular `validator` /
                `async_validator`) keys

        Returns:
            The new GroupControl
        """
        controls = {
            name: cls._create_control(config) for name, config in controls_config.items()
        }
        return GroupControl(controls, _group_options(options))

    @classmethod
    def control(
        cls,
        form_state: Any = None,
        validator_or_opts: Any = None,
        async_validator: Any = None,
    ) -> LeafControl:
        """Build a leaf; arguments are those of `LeafControl`."""
        return LeafControl(form_state, validator_or_opts, async_validator)

    @classmethod
    def array(
        cls,
        controls_config: list[Any],
        validator_or_opts: Any = None,
        async_validator: Any = None,
    ) -> ArrayControl:
        """Build an array from a list of child configurations."""
        controls = [cls._create_control(config) for config in controls_config]
        return ArrayControl(controls, validator_or_opts, async_validator)

    @classmethod
    def build(cls, data: Any) -> Control:
        """
        Build a tree mirroring a raw value, such as one from `get_raw_value()`.

        Params:
            data: Nested mappings and lists; every other object is a leaf value

        Returns:
            A GroupControl for a mapping, an ArrayControl for a list, otherwise
            a LeafControl holding `data` unchanged
        """
        if isinstance(data, Control):
            return data
        if isinstance(data, Mapping):
            return GroupControl({name: cls.build(item) for name, item in data.items()})
        if isinstance(data, list):
            return ArrayControl([cls.build(item) for item in data])
        # Boxed so that tuples and boxed-looking values stay plain values
        return cls.control(BoxedValue(data))

    @classmethod
    def _create_control(cls, config: Any) -> Control:
        if isinstance(config, Control):
            return config
        if isinstance(config, tuple):
            value = config[0] if len(config) > 0 else None
            validator = config[1] if len(config) > 1 else None
            async_validator = config[2] if len(config) > 2 else None
            return cls.control(value, validator, async_validator)
        if is_boxed_value(config):
            return cls.control(config)
        if isinstance(config, Mapping):
            return cls.group(config)
        if isinstance(config, list):
            return cls.array(config)
        return cls.control(config)
