"""Hierarchical messages and errors with attached context.

    >>> import karma
    >>> err = karma.describe("host", "example.com").format("system error", "unable to resolve")
    >>> print(err)
    unable to resolve
    ├─ system error
    └─ host: example.com
"""

from karma.context import Context, describe
from karma.core import (
    Hierarchical,
    Karma,
    Reason,
    contains,
    find,
    format,
    push,
)
from karma.errors import KarmaDecodeError, KarmaError
from karma.flatten import flatten
from karma.reflect import describe_deep
from karma.render import render
from karma.serialize import dumps, from_dict, loads, to_dict
from karma.style import (
    ASCII_STYLE,
    BOX_STYLE,
    BranchStyle,
    branch_style,
    get_branch_style,
    set_branch_style,
)

__all__ = [
    "ASCII_STYLE",
    "BOX_STYLE",
    "BranchStyle",
    "Context",
    "Hierarchical",
    "Karma",
    "KarmaDecodeError",
    "KarmaError",
    "Reason",
    "branch_style",
    "contains",
    "describe",
    "describe_deep",
    "dumps",
    "find",
    "flatten",
    "format",
    "from_dict",
    "get_branch_style",
    "loads",
    "push",
    "render",
    "set_branch_style",
    "to_dict",
]
