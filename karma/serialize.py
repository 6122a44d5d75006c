"""Structured (de)serialization of hierarchical messages.

Documents have the shape::

    {
        "reason": <document or scalar>,
        "message": "unable to connect",
        "context": [{"key": "host", "value": "example.com"}],
    }

``reason`` and ``context`` are omitted when absent. Since the ``reason`` slot
does not say which kind of value it holds, decoding tries a nested document
first and falls back to a plain value.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from karma.context import Context
from karma.core import Karma, Reason, is_sequence
from karma.errors import KarmaDecodeError

logger = logging.getLogger(__name__)

_SCALARS = (str, int, float, bool)


class ContextEntry(BaseModel):
    """One ``{"key": ..., "value": ...}`` record of a serialized context."""

    model_config = ConfigDict(extra="forbid")

    key: str
    value: Any = None


class KarmaDocument(BaseModel):
    """Validated form of a serialized message."""

    model_config = ConfigDict(extra="forbid")

    reason: Any = None
    message: str = ""
    context: list[ContextEntry] | None = None


def to_dict(karma: Karma) -> dict[str, Any]:
    """Encode ``karma`` and its nested reasons as plain dicts and lists."""

    document: dict[str, Any] = {}
    if karma.reason is not None:
        document["reason"] = encode_reason(karma.reason)
    if karma.text:
        document["message"] = karma.text
    if karma.context:
        document["context"] = karma.context.to_list()
    return document


def encode_reason(reason: Reason) -> Any:
    if isinstance(reason, Karma):
        return to_dict(reason)
    custom = getattr(reason, "to_dict", None)
    if callable(custom):
        return custom()
    if isinstance(reason, BaseException):
        return str(reason)
    if isinstance(reason, (bytes, bytearray)):
        return bytes(reason).decode("utf-8", errors="replace")
    if is_sequence(reason):
        return [encode_reason(item) for item in reason]
    return reason


def from_dict(document: Mapping[str, Any]) -> Karma:
    """Decode a document produced by :func:`to_dict`.

    Raises :class:`KarmaDecodeError` when the document is malformed.
    """

    try:
        parsed = KarmaDocument.model_validate(document)
    except ValidationError as e:
        raise KarmaDecodeError(f"malformed document: {e}", document) from e
    return _build(parsed)


def _build(parsed: KarmaDocument) -> Karma:
    context = Context.from_list(entry.model_dump() for entry in parsed.context or ())
    return Karma(parsed.message, decode_reason(parsed.reason), context)


def decode_reason(payload: Any) -> Reason:
    """Decode a ``reason`` slot: a nested document if possible, else a plain value."""

    if payload is None:
        return None
    if isinstance(payload, Mapping):
        try:
            return _build(KarmaDocument.model_validate(payload))
        except ValidationError as e:
            logger.debug("Reason is not a nested message, keeping it as a mapping: %s", e)
            return dict(payload)
    if isinstance(payload, list):
        return [decode_reason(item) for item in payload]
    if isinstance(payload, _SCALARS):
        return payload
    raise KarmaDecodeError(f"unsupported reason of type {type(payload).__name__}", payload)


def dumps(karma: Karma, **kwargs: Any) -> str:
    """Serialize ``karma`` to JSON text; ``kwargs`` go to :func:`json.dumps`."""

    kwargs.setdefault("ensure_ascii", False)
    return json.dumps(to_dict(karma), **kwargs)


def loads(text: str | bytes) -> Karma:
    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise KarmaDecodeError(f"invalid JSON: {e}", text) from e
    if not isinstance(document, dict):
        raise KarmaDecodeError(f"expected a JSON object, got {type(document).__name__}", document)
    return from_dict(document)


__all__ = [
    "ContextEntry",
    "KarmaDocument",
    "decode_reason",
    "dumps",
    "encode_reason",
    "from_dict",
    "loads",
    "to_dict",
]
