"""A request identifier that is either an integer or a string."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .codec import dumps, loads

__all__ = ["IntString", "parse_int_string", "coerce_int_string"]


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True, eq=False)
class IntString:
    value: Any = None

    def is_int(self) -> bool:
        return _is_int(self.value)

    def is_string(self) -> bool:
        return isinstance(self.value, str)

    def int_value(self) -> int | None:
        return self.value if self.is_int() else None

    def string_value(self) -> str | None:
        return self.value if self.is_string() else None

    def to_python(self) -> int | str:
        """Return the JSON-ready value, failing for unsupported contents."""
        if self.is_int() or self.is_string():
            return self.value
        raise ValueError("IntString contains unsupported type")

    def to_json(self) -> str:
        return dumps(self.to_python())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IntString):
            return NotImplemented
        if self.is_int():
            return other.is_int() and self.value == other.value
        if self.is_string():
            return other.is_string() and self.value == other.value
        return False

    def __hash__(self) -> int:
        return hash((type(self.value), self.value))


def coerce_int_string(value: Any) -> IntString:
    """Wrap an already decoded JSON value."""
    if value is None:
        raise ValueError("IntString cannot be null")
    if _is_int(value) or isinstance(value, str):
        return IntString(value)
    raise ValueError("IntString must be a string or an integer")


def parse_int_string(data: str | bytes) -> IntString:
    """Decode JSON text into an IntString."""
    return coerce_int_string(loads(data))