"""Collapse a hierarchical message into a single line."""

from __future__ import annotations

from typing import Any

from karma.core import Karma, Reason, stringify


def flatten(reason: Reason) -> Any:
    """Return ``reason`` as a one-line message.

    Messages of every nested reason are joined with ``": "``, context pairs
    of the whole tree follow after ``" | "`` as ``key=value``::

        twix: bar: foo: eof or something: EOF | barval=42 wox=84

    Anything that is not a :class:`Karma` is returned unchanged.
    """

    if not isinstance(reason, Karma):
        return reason

    messages = [reason.message]
    pairs: list[tuple[str, Any]] = reason.headline_context().pairs()

    def collect(nested: Reason) -> None:
        if isinstance(nested, Karma):
            messages.append(nested.message)
            pairs.extend(nested.headline_context())
        else:
            messages.append(stringify(nested))

    reason.descend(collect)

    text = ": ".join(messages)
    if pairs:
        text += " | " + " ".join(f"{key}={value}" for key, value in pairs)
    return Karma(text)


__all__ = ["flatten"]
