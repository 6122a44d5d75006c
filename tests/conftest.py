"""Shared fixtures for karma tests."""

import pytest

from karma.style import BOX_STYLE, set_branch_style


@pytest.fixture(autouse=True)
def box_style():
    """Every test starts from the box-drawing style and cannot leak changes."""
    previous = set_branch_style(BOX_STYLE)
    yield BOX_STYLE
    set_branch_style(previous)