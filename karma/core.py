"""Hierarchical messages: a message, the reason behind it and its context.

Turns::

    can't pull remote 'origin': can't run git fetch 'origin': exit status 128

into::

    can't pull remote 'origin'
    └─ can't run git fetch 'origin'
       └─ exit status 128
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, Any, Protocol, TypeAlias, runtime_checkable

from karma.context import Context, describe

if TYPE_CHECKING:
    from karma.style import BranchStyle

# None, a Karma, a list/tuple of reasons, or any terminal value
# (an exception, str, bytes or anything printable).
Reason: TypeAlias = Any


@runtime_checkable
class Hierarchical(Protocol):
    """Anything that exposes a message and nested reasons like :class:`Karma`."""

    @property
    def message(self) -> str: ...

    def reasons(self) -> list[Reason]: ...


def is_sequence(reason: Reason) -> bool:
    return isinstance(reason, (list, tuple))


def stringify(reason: Reason) -> str:
    """Natural string form of a terminal reason."""

    if isinstance(reason, str):
        return reason
    if isinstance(reason, (bytes, bytearray)):
        return bytes(reason).decode("utf-8", errors="replace")
    return str(reason)


def interpolate(template: str, args: tuple[Any, ...]) -> str:
    """printf-style formatting that reports mismatches in the text instead of raising."""

    if not args:
        return template
    try:
        return template % args
    except (TypeError, ValueError, KeyError):
        return f"{template} %!({', '.join(repr(arg) for arg in args)})"


class Karma(Exception):
    """Hierarchical message linked with the reason that caused it.

    A message with an empty ``text`` is *trivial*: it exists only to carry its
    reason and context and does not add a level to the rendered tree.
    """

    def __init__(
        self,
        text: str = "",
        reason: Reason = None,
        context: Context | None = None,
    ) -> None:
        super().__init__(text)
        self._text = text
        self._reason = reason
        self._context = context if context is not None else Context()

    @property
    def text(self) -> str:
        return self._text

    @property
    def reason(self) -> Reason:
        return self._reason

    @property
    def context(self) -> Context:
        return self._context

    @property
    def is_trivial(self) -> bool:
        return self._text == ""

    @property
    def message(self) -> str:
        """Top-level message; a trivial node borrows the message of its first reason."""

        if self._text or self._reason is None:
            return self._text
        reasons = self.reasons()
        if not reasons:
            return ""
        first = reasons[0]
        if isinstance(first, Hierarchical):
            return first.message
        return stringify(first)

    def reasons(self) -> list[Reason]:
        if self._reason is None:
            return []
        if is_sequence(self._reason):
            return list(self._reason)
        return [self._reason]

    def with_context(self, context: Context) -> Karma:
        return Karma(self._text, self._reason, context)

    def descend(self, callback: Callable[[Reason], object]) -> None:
        """Call ``callback`` for every nested reason, depth first.

        Both nested messages and terminal values are reported. The reason a
        trivial message borrows its text from is not reported again.
        """

        for reason in self._descendants():
            callback(reason)
            if isinstance(reason, Karma):
                reason.descend(callback)

    def _descendants(self) -> list[Reason]:
        reasons = _splice(self.reasons())
        if self._text or not reasons:
            return reasons
        first, rest = reasons[0], reasons[1:]
        if isinstance(first, Karma):
            return first._descendants() + rest
        return rest

    def headline_context(self) -> Context:
        """Context of this message, including that of the messages a trivial node borrows its text from."""

        if self._text:
            return self._context
        reasons = _splice(self.reasons())
        if reasons and isinstance(reasons[0], Karma):
            return reasons[0].headline_context() + self._context
        return self._context

    def render(self, style: BranchStyle | None = None) -> str:
        from karma.render import render

        return render(self, style)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"Karma(text={self._text!r}, reason={self._reason!r}, context={self._context!r})"

    def __reduce__(self) -> tuple[Any, ...]:
        return (self.__class__, (self._text, self._reason, self._context))


def _splice(reasons: list[Reason]) -> list[Reason]:
    result: list[Reason] = []
    for reason in reasons:
        if is_sequence(reason):
            result.extend(_splice(list(reason)))
        else:
            result.append(reason)
    return result


def format(reason: Reason, template: str, *args: Any) -> Karma:  # noqa: A001
    """Create a message from a printf-style ``template`` wrapping ``reason``.

    With ``reason=None`` this behaves like building a plain error message.
    """

    return Karma(interpolate(template, args), reason)


def push(reason: Reason, *reasons: Reason) -> Karma:
    """Return ``reason`` as a message with ``reasons`` added as extra sibling branches."""

    if isinstance(reason, Karma):
        parent = reason
    else:
        parent = Karma(stringify(reason))

    branches = parent.reasons()
    branches.extend(extra for extra in reasons if extra is not None)
    return Karma(parent.text, branches, parent.context)


def _walk(reason: Reason) -> Iterator[Reason]:
    """Yield ``reason`` and everything nested in it, depth first."""

    if is_sequence(reason):
        for item in reason:
            yield from _walk(item)
        return
    yield reason
    if isinstance(reason, Karma):
        for nested in reason.reasons():
            yield from _walk(nested)


def contains(chain: Reason, candidate: Reason) -> bool:
    """Report whether ``candidate`` appears among the terminal reasons of ``chain``.

    Reasons are compared by their string form, so a freshly built
    ``ValueError("boom")`` matches the one stored in the chain.
    """

    expected = stringify(candidate)
    if not isinstance(chain, Karma) and not is_sequence(chain):
        return stringify(chain) == expected
    return any(
        not isinstance(reason, Karma) and stringify(reason) == expected
        for reason in _walk(chain)
    )


def find(chain: Reason, kind: type | Callable[[Reason], bool]) -> Reason | None:
    """Return the first reason in ``chain`` matching ``kind``, or ``None``.

    ``kind`` is either a class, matched with ``isinstance``, or a predicate.
    """

    if isinstance(kind, type):

        def matches(reason: Reason) -> bool:
            return isinstance(reason, kind)

    else:
        matches = kind

    candidates = _walk(chain.reasons()) if isinstance(chain, Karma) else _walk(chain)
    for reason in candidates:
        if reason is not None and matches(reason):
            return reason
    return None


__all__ = [
    "Hierarchical",
    "Karma",
    "Reason",
    "contains",
    "describe",
    "find",
    "format",
    "interpolate",
    "is_sequence",
    "push",
    "stringify",
]
