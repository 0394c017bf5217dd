"""
formtree control variants.

This package provides the abstract `Control` base and its three concrete
variants: `LeafControl` (scalar), `GroupControl` (keyed by name) and
`ArrayControl` (keyed by position).
"""

from formtree.controls.array import ArrayControl
from formtree.controls.base import Control
from formtree.controls.group import GroupControl
from formtree.controls.leaf import LeafControl

__all__ = [
    "Control",
    "LeafControl",
    "GroupControl",
    "ArrayControl",
]
