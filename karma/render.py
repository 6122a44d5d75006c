"""Render hierarchical messages as box-drawn trees."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from karma.core import Hierarchical, Karma, Reason, is_sequence, stringify
from karma.style import BranchStyle, resolve_style


@dataclass(frozen=True)
class ContextBranch:
    """A context pair rendered as the trailing ``key: value`` branch of a message."""

    key: str
    value: Any


def render(reason: Reason, style: BranchStyle | None = None) -> str:
    """Render ``reason`` and everything nested in it.

    Style changes made with :func:`karma.style.set_branch_style` apply to every
    render that does not pass ``style`` explicitly.
    """

    style = resolve_style(style)
    if isinstance(reason, Karma):
        return _render_karma(reason, style)
    if is_sequence(reason):
        return _render_karma(Karma("", list(reason)), style)
    return stringify(reason)


def branches(karma: Karma) -> list[Reason]:
    """Reasons rendered directly below ``karma``, followed by its context pairs.

    Nested sequences and trivial messages are spliced in place, so they never
    add a level of their own.
    """

    result = _expand(karma.reasons())
    result.extend(ContextBranch(key, value) for key, value in karma.context)
    return result


def _expand(reasons: list[Reason]) -> list[Reason]:
    result: list[Reason] = []
    for reason in reasons:
        if is_sequence(reason):
            result.extend(_expand(list(reason)))
        elif _is_transparent(reason):
            result.extend(branches(reason))
        else:
            result.append(reason)
    return result


def _is_transparent(reason: Reason) -> bool:
    return isinstance(reason, Karma) and reason.is_trivial and reason.reason is not None


def _is_multilevel(reason: Reason) -> bool:
    if isinstance(reason, ContextBranch):
        return False
    return isinstance(reason, Hierarchical) and len(reason.reasons()) > 0


def _render_branch(reason: Reason, style: BranchStyle) -> str:
    if isinstance(reason, ContextBranch):
        return f"{reason.key}: {style.format_value(reason.value)}"
    return render(reason, style)


def _render_karma(karma: Karma, style: BranchStyle) -> str:
    reason = karma.reason
    single = (
        reason is not None
        and not is_sequence(reason)
        and not _is_transparent(reason)
        and not karma.context
    )
    if single:
        nested = _render_branch(reason, style)
        if not karma.text:
            return nested
        indentation = " " * style.indent
        return karma.text + "\n" + style.delimiter + nested.replace("\n", "\n" + indentation)

    items = branches(karma)
    if not items:
        return karma.text
    return _render_branches(karma.text, items, style)


def _render_branches(text: str, items: list[Reason], style: BranchStyle) -> str:
    chainer_width = len(style.chainer)
    prolongate = any(_is_multilevel(item) for item in items[:-1])
    prolongator = "\n" + style.chainer.rstrip()

    indentation = style.chainer + " " * max(style.indent - chainer_width, 0)
    last_indentation = " " * max(style.indent, chainer_width)

    output = text
    for index, item in enumerate(items):
        last = index == len(items) - 1
        if output:
            output += "\n" + (style.delimiter if last else style.splitter)

        output += _render_branch(item, style).replace(
            "\n", "\n" + (last_indentation if last else indentation)
        )

        if prolongate and not last:
            output += prolongator

    return output


__all__ = ["ContextBranch", "branches", "render"]
