"""
Whole-form validation reports.

Collects the errors of every control in a tree and condenses the tree's
current status into a `FormValidateResult` for UI bindings. Statuses are read
as they are; call `update_tree_validity()` first when leaves were changed
without re-validating their ancestors.
"""

from formtree.controls import Control
from formtree.core.path_utils import PathResolver
from formtree.core.types import ErrorMap, PathSegment
from formtree.models import FormValidateResult


def collect_errors(control: Control) -> dict[str, ErrorMap]:
    """
    Gather the errors of a control and all its descendants.

    Params:
        control: Root of the subtree to inspect

    Returns:
        Mapping of dotted path (relative to `control`, "" for itself) to that
        control's errors, in tree iteration order; controls without errors are
        omitted
    """
    found: dict[str, ErrorMap] = {}

    def visit(node: Control, segments: tuple[PathSegment, ...]) -> None:
        if node.errors:
            found[PathResolver.join(segments)] = dict(node.errors)
        node._for_each_child(lambda child, key: visit(child, (*segments, key)))

    visit(control, ())
    return found


def summarize(control: Control) -> FormValidateResult:
    """
    Report whether a form is valid, with a message naming the first failure.

    Params:
        control: Root of the form

    Returns:
        FormValidateResult with `message` None when the form is valid
    """
    if control.valid:
        return FormValidateResult(valid=True, invalid=False)

    errors = collect_errors(control)
    if errors:
        path, first = next(iter(errors.items()))
        message = f"{path or '<root>'}: {', '.join(first)}"
    elif control.pending:
        message = "validation pending"
    elif control.disabled:
        message = "form is disabled"
    else:
        message = "form is invalid"

    return FormValidateResult(valid=False, invalid=control.invalid, message=message)
