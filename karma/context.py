"""Persistent key/value context attached to hierarchical messages."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from karma.core import Karma


@dataclass(frozen=True)
class _Link:
    """Immutable cell of the list. Cells point backwards, at the pair appended before them."""

    key: str
    value: Any
    previous: _Link | None
    size: int


class Context:
    """Ordered list of ``(key, value)`` pairs describing a failure.

    Appending returns a new list and never touches the receiver, so several
    lists can be derived from one shared base without interfering::

        base = describe("host", "example.com")
        read = base.describe("op", "read")
        write = base.describe("op", "write")  # ``read`` is unchanged

    Keys may repeat; pairs are kept in the order they were appended.
    """

    __slots__ = ("_tail",)

    def __init__(self, _tail: _Link | None = None) -> None:
        self._tail = _tail

    def describe(self, key: str, value: Any) -> Context:
        """Return a new list with ``key: value`` appended after the existing pairs."""

        size = self._tail.size + 1 if self._tail is not None else 1
        return Context(_Link(key=key, value=value, previous=self._tail, size=size))

    def extend(self, pairs: Iterable[tuple[str, Any]]) -> Context:
        result = self
        for key, value in pairs:
            result = result.describe(key, value)
        return result

    def walk(self, callback: Callable[[str, Any], object]) -> None:
        """Call ``callback(key, value)`` for every pair, head to tail."""

        for key, value in self:
            callback(key, value)

    def pairs(self) -> list[tuple[str, Any]]:
        return list(self)

    def to_list(self) -> list[dict[str, Any]]:
        """Encode as an ordered list of ``{"key": ..., "value": ...}`` records."""

        return [{"key": key, "value": value} for key, value in self]

    @classmethod
    def from_list(cls, records: Iterable[Mapping[str, Any]]) -> Context:
        result = cls()
        for record in records:
            result = result.describe(record["key"], record.get("value"))
        return result

    def reason(self, reason: Any) -> Karma:
        """Attach this context to ``reason`` without adding a message.

        A hierarchical ``reason`` keeps its message and nested reasons and gets
        these pairs appended to its own context. Anything else is wrapped into
        a message-less node carrying this context.
        """

        from karma.core import Karma

        if isinstance(reason, Karma):
            return reason.with_context(reason.context + self)
        return Karma("", reason, self)

    def format(self, reason: Any, template: str, *args: Any) -> Karma:
        """Create a new message wrapping ``reason`` and carrying this context."""

        from karma.core import Karma, interpolate

        return Karma(interpolate(template, args), reason, self)

    def __iter__(self) -> Iterator[tuple[str, Any]]:
        links: list[_Link] = []
        link = self._tail
        while link is not None:
            links.append(link)
            link = link.previous
        for link in reversed(links):
            yield link.key, link.value

    def __len__(self) -> int:
        return self._tail.size if self._tail is not None else 0

    def __bool__(self) -> bool:
        return self._tail is not None

    def __add__(self, other: object) -> Context:
        if not isinstance(other, Context):
            return NotImplemented
        if self._tail is None:
            return other
        return self.extend(other)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Context):
            return NotImplemented
        return len(self) == len(other) and self.pairs() == other.pairs()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        body = ", ".join(f"{key}={value!r}" for key, value in self)
        return f"Context({body})"


def describe(key: str, value: Any) -> Context:
    """Start a new context list with a single ``key: value`` pair."""

    return Context().describe(key, value)


__all__ = ["Context", "describe"]
