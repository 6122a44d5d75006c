from __future__ import annotations

from typing import Any


class KarmaError(Exception):
    """Base class for errors raised by the karma package itself."""


class KarmaDecodeError(KarmaError, ValueError):
    """Raised when a serialized message tree cannot be decoded."""

    def __init__(self, reason: str, payload: Any = None) -> None:
        self.payload = payload
        super().__init__(
            f"Unable to decode hierarchical message: {reason}\n"
            f"Hint: expected {{'message': str, 'reason': ..., 'context': [{{'key': str, 'value': ...}}]}}"
        )


__all__ = ["KarmaDecodeError", "KarmaError"]
