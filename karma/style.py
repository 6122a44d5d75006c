"""Glyphs and indentation used when rendering message trees."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Any

logger = logging.getLogger(__name__)


def format_context_value(value: Any) -> str:
    """Default string form of a context value; empty strings become ``<empty>``."""

    if isinstance(value, str) and value == "":
        return "<empty>"
    return str(value)


@dataclass(frozen=True)
class BranchStyle:
    """Render configuration for hierarchical messages.

    ``delimiter`` starts the last branch of a level, ``splitter`` every other
    branch, and ``chainer`` continues a non-last branch on the lines below it.
    ``indent`` is the width nested lines are shifted by.
    """

    delimiter: str = "└─ "
    chainer: str = "│ "
    splitter: str = "├─ "
    indent: int = 3
    format_value: Callable[[Any], str] = format_context_value

    def with_overrides(self, **overrides: Any) -> BranchStyle:
        return replace(self, **overrides) if overrides else self


BOX_STYLE = BranchStyle()
ASCII_STYLE = BranchStyle(delimiter="\\_ ", chainer="| ", splitter="+ ")

_PRESETS = {"box": BOX_STYLE, "ascii": ASCII_STYLE}


def preset(name: str | None) -> BranchStyle:
    """Return the named preset style; unknown or empty names give the box style."""

    return _PRESETS.get((name or "").strip().lower(), BOX_STYLE)


# Environment variable selecting the initial style: "box" (default) or "ascii"
DEFAULT_STYLE = preset(os.environ.get("KARMA_BRANCH_STYLE"))

_current = DEFAULT_STYLE


def get_branch_style() -> BranchStyle:
    """Return the process-wide style used when no explicit style is passed."""

    return _current


def set_branch_style(style: BranchStyle | None = None, **overrides: Any) -> BranchStyle:
    """Replace the process-wide style and return the previous one.

    ``style`` defaults to the current style, ``overrides`` are applied on top::

        previous = set_branch_style(delimiter="* ")
        ...
        set_branch_style(previous)
    """

    global _current

    previous = _current
    _current = (style or previous).with_overrides(**overrides)
    logger.debug("Branch style changed from %r to %r", previous, _current)
    return previous


@contextmanager
def branch_style(style: BranchStyle | None = None, **overrides: Any) -> Iterator[BranchStyle]:
    """Temporarily change the process-wide style, restoring it on exit."""

    previous = set_branch_style(style, **overrides)
    try:
        yield _current
    finally:
        set_branch_style(previous)


def resolve_style(style: BranchStyle | None) -> BranchStyle:
    return style if style is not None else _current


__all__ = [
    "ASCII_STYLE",
    "BOX_STYLE",
    "DEFAULT_STYLE",
    "BranchStyle",
    "branch_style",
    "format_context_value",
    "get_branch_style",
    "preset",
    "resolve_style",
    "set_branch_style",
]
