"""
Per-control configuration.

`ControlOptions` bundles the sync and async validators of a control. It is
accepted wherever a control takes its validator argument, next to the
shorthand forms (a single callable, a sequence of callables, or None).
"""

from collections.abc import Callable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from formtree.exceptions import InvalidValidatorError


class ControlOptions(BaseModel):
    """
    Validator configuration for a single control.

    Params:
        validators: Sync validators, run in order on every validation round
        async_validators: Async validators, awaited in order after the sync ones pass
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    validators: list[Callable[..., Any]] | None = None
    async_validators: list[Callable[..., Any]] | None = None

    @field_validator("validators", "async_validators", mode="before")
    @classmethod
    def _wrap_single_callable(cls, value: Any) -> Any:
        if callable(value):
            return [value]
        if isinstance(value, tuple):
            return list(value)
        return value


def as_validator_list(value: Any, kind: str = "validator") -> list[Callable[..., Any]]:
    """
    Normalize a validator argument into a list.

    Params:
        value: A callable, a list or tuple of callables, or None
        kind: Description used in error messages

    Returns:
        A new list of callables (empty for None)

    Raises:
        InvalidValidatorError: When value or one of its items is not callable
    """
    if value is None:
        return []
    if callable(value):
        return [value]
    if isinstance(value, (list, tuple)):
        for item in value:
            if not callable(item):
                raise InvalidValidatorError(kind, item)
        return list(value)
    raise InvalidValidatorError(kind, value)


def _as_options(validator_or_opts: Any) -> ControlOptions | None:
    if isinstance(validator_or_opts, ControlOptions):
        return validator_or_opts
    if isinstance(validator_or_opts, Mapping):
        return ControlOptions.model_validate(dict(validator_or_opts))
    return None


def coerce_to_validators(validator_or_opts: Any) -> list[Callable[..., Any]]:
    """Extract the sync validator list from a validator argument or options."""
    options = _as_options(validator_or_opts)
    if options is not None:
        return as_validator_list(options.validators)
    return as_validator_list(validator_or_opts)


def coerce_to_async_validators(
    async_validator: Any, validator_or_opts: Any = None
) -> list[Callable[..., Any]]:
    """Extract the async validator list; options take precedence over the positional argument."""
    options = _as_options(validator_or_opts)
    if options is not None:
        return as_validator_list(options.async_validators, "async validator")
    return as_validator_list(async_validator, "async validator")
