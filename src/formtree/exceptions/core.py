"""
Exception classes for formtree control trees.

Structural and programmer errors (unknown keys, empty collections, shared
children, malformed validator arguments) are raised synchronously. Validation
failures are never raised; they are reported through a control's `errors`.
"""


class FormTreeError(Exception):
    """Base exception for all formtree errors."""

    pass


class MissingControlError(FormTreeError):
    """Raised when a value is set for a key or index with no registered control."""

    def __init__(self, key: str | int, kind: str = "group"):
        """
        Initialize the exception.

        Params:
            key: The unknown name (group) or index (array)
            kind: Kind of composite, "group" or "array"
        """
        self.key = key
        self.kind = kind
        if kind == "array":
            message = f"Cannot find form control at index {key}"
        else:
            message = f"Cannot find form control with name: '{key}'"
        super().__init__(message)


class EmptyCollectionError(FormTreeError):
    """Raised when a composite is addressed before any child was registered."""

    def __init__(self, kind: str = "group"):
        """
        Initialize the exception.

        Params:
            kind: Kind of composite, "group" or "array"
        """
        self.kind = kind
        super().__init__(
            f"There are no form controls registered with this {kind} yet"
        )


class ControlOwnershipError(FormTreeError):
    """Raised when a control that already has a parent is registered again."""

    def __init__(self, key: str | int):
        """
        Initialize the exception.

        Params:
            key: The name or index the control was being registered under
        """
        self.key = key
        super().__init__(
            f"Control for '{key}' already belongs to a composite; remove it from its parent first"
        )


class InvalidValidatorError(FormTreeError, TypeError):
    """Raised when a validator argument is not a callable, a sequence of callables or None."""

    def __init__(self, kind: str, value: object):
        """
        Initialize the exception.

        Params:
            kind: Validator kind ("validator" or "async validator")
            value: The offending value
        """
        self.kind = kind
        self.value = value
        super().__init__(
            f"Invalid {kind}: expected a callable, a sequence of callables or None, "
            f"got {type(value).__name__}"
        )
