"""
Shared test fixtures and utilities for the formtree test suite.
"""

import pytest

from formtree import ArrayControl, GroupControl, LeafControl
from formtree.validators import required


@pytest.fixture
def profile_form():
    """Three-level tree: root group -> nested group / array -> leaves.

    Layout:
        name            LeafControl("Nancy", required)
        address.city    LeafControl("River Heights")
        address.zip     LeafControl("12345")
        aliases.0       LeafControl("N")
        aliases.1       LeafControl("ND")
    """
    return GroupControl(
        {
            "name": LeafControl("Nancy", required),
            "address": GroupControl(
                {
                    "city": LeafControl("River Heights"),
                    "zip": LeafControl("12345"),
                }
            ),
            "aliases": ArrayControl([LeafControl("N"), LeafControl("ND")]),
        }
    )


@pytest.fixture
def call_log():
    """List collecting validator invocations in call order."""
    return []
