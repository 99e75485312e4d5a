"""Strict JSON encoding and decoding with uniform error messages."""

from __future__ import annotations

import json
from typing import Any

__all__ = ["JSONSyntaxError", "loads", "dumps"]


class JSONSyntaxError(ValueError):
    """Raised when input is not well-formed JSON."""


_CONTEXTS = {
    "Expecting value": "looking for beginning of value",
    "Expecting property name enclosed in double quotes": (
        "looking for beginning of object key string"
    ),
    "Expecting ':' delimiter": "after object key",
    "Expecting ',' delimiter": "after value",
    "Extra data": "after top-level value",
    "Invalid control character at": "in string literal",
    "Invalid \\escape": "in string escape code",
    "Invalid \\uXXXX escape": "in string escape code",
}

_HTML_ESCAPES = {
    "&": "\\u0026",
    "<": "\\u003c",
    ">": "\\u003e",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def _quote_char(ch: str) -> str:
    if ch == "'":
        return "'\\''"
    if ch == '"':
        return "'\"'"
    return repr(ch)


def _describe(exc: json.JSONDecodeError, text: str) -> str:
    if exc.pos >= len(text.rstrip()) or exc.msg.startswith("Unterminated"):
        return "unexpected end of JSON input"
    context = _CONTEXTS.get(exc.msg, f"({exc.msg})")
    return f"invalid character {_quote_char(text[exc.pos])} {context}"


def _reject_constant(name: str) -> Any:
    raise JSONSyntaxError(
        f"invalid character {_quote_char(name[0])} looking for beginning of value"
    )


def loads(data: str | bytes | bytearray) -> Any:
    """Decode JSON text, rejecting NaN and Infinity literals."""
    text = bytes(data).decode("utf-8") if isinstance(data, (bytes, bytearray)) else data
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as exc:
        raise JSONSyntaxError(_describe(exc, text)) from None


def dumps(value: Any) -> str:
    """Encode a value as compact JSON with HTML-sensitive characters escaped."""
    text = json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    for char, escaped in _HTML_ESCAPES.items():
        text = text.replace(char, escaped)
    return text