"""JSON-RPC error codes and the error object."""

from __future__ import annotations

from enum import IntEnum
from typing import Any

__all__ = ["ErrorCode", "JSONRPCError", "default_error_message", "error_from_dict"]


class ErrorCode(IntEnum):
    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603


_DEFAULT_MESSAGES = {
    ErrorCode.PARSE_ERROR: "An error occurred on the server while parsing JSON object",
    ErrorCode.INVALID_REQUEST: "The JSON sent is not a valid Request object",
    ErrorCode.METHOD_NOT_FOUND: "The method does not exist / is not available",
    ErrorCode.INVALID_PARAMS: "Invalid method parameter(s)",
    ErrorCode.INTERNAL_ERROR: "Internal JSON-RPC error",
}


def default_error_message(code: int) -> str:
    """Return the standard message for a code, or an empty string."""
    return _DEFAULT_MESSAGES.get(code, "")


class JSONRPCError(Exception):
    """A JSON-RPC error object that can also be raised."""

    def __init__(self, code: int, message: str = "", data: Any = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.data = data

    def __str__(self) -> str:
        return self.message or default_error_message(self.code)

    def __repr__(self) -> str:
        return f"JSONRPCError(code={self.code!r}, message={self.message!r}, data={self.data!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JSONRPCError):
            return NotImplemented
        return (self.code, self.message, self.data) == (other.code, other.message, other.data)

    __hash__ = Exception.__hash__

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"code": int(self.code), "message": self.message}
        if self.data is not None:
            result["data"] = self.data
        return result


def error_from_dict(data: Any) -> JSONRPCError:
    """Build an error object from decoded JSON."""
    if not isinstance(data, dict):
        raise ValueError("cannot unmarshal non-object into error object")
    code = data.get("code")
    if code is None:
        code = 0
    if isinstance(code, bool) or not isinstance(code, int):
        raise ValueError("cannot unmarshal value into field code of type int")
    message = data.get("message")
    if message is None:
        message = ""
    if not isinstance(message, str):
        raise ValueError("cannot unmarshal value into field message of type string")
    return JSONRPCError(code, message, data.get("data"))