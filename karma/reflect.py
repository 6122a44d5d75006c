"""Describe structured values as flat context pairs."""

from __future__ import annotations

import dataclasses
from typing import Any

from pydantic import BaseModel

from karma.context import Context


def describe_deep(prefix: str, value: Any) -> Context:
    """Return one context pair per leaf of ``value``.

    Dataclasses and pydantic models are walked field by field, lists and tuples
    element by element; keys are paths such as ``config.servers[1].host``.
    Mappings and other values are leaves, described by their ``str()``.
    """

    pairs: list[tuple[str, Any]] = []
    _walk(pairs, value, prefix)
    return Context().extend(pairs)


def _walk(pairs: list[tuple[str, Any]], value: Any, path: str) -> None:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        for field in dataclasses.fields(value):
            if field.name.startswith("_"):
                continue
            _walk(pairs, getattr(value, field.name), _join(path, field.name))
    elif isinstance(value, BaseModel):
        for name in type(value).model_fields:
            if name.startswith("_"):
                continue
            _walk(pairs, getattr(value, name), _join(path, name))
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            _walk(pairs, item, _join(path, f"[{index}]"))
    else:
        pairs.append((path, str(value)))


def _join(prefix: str, key: str) -> str:
    if key.startswith("["):
        return prefix + key
    if not prefix:
        return key
    return prefix + "." + key


__all__ = ["describe_deep"]
