"""JSON-RPC 2.0 message types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .codec import dumps, loads
from .errors import JSONRPCError, error_from_dict
from .intstring import IntString, coerce_int_string

__all__ = [
    "JSONRPC_VERSION",
    "MessageType",
    "Request",
    "Notification",
    "Response",
    "UnionRequest",
    "request_from_dict",
    "response_from_dict",
    "union_request_from_dict",
]

JSONRPC_VERSION = "2.0"


class MessageType(str, Enum):
    INVALID = "Invalid"
    METHOD = "Request"
    NOTIFICATION = "Notification"
    RESPONSE = "Response"


def _put_raw(out: dict[str, Any], key: str, raw: str | None) -> None:
    if raw is not None:
        out[key] = loads(raw)


@dataclass
class Request:
    """A call expecting a response; params holds raw JSON text."""

    jsonrpc: str
    id: IntString
    method: str
    params: str | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "jsonrpc": self.jsonrpc,
            "id": self.id.to_python(),
            "method": self.method,
        }
        _put_raw(out, "params", self.params)
        return out


@dataclass
class Notification:
    """A call expecting no response; params holds raw JSON text."""

    jsonrpc: str
    method: str
    params: str | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"jsonrpc": self.jsonrpc, "method": self.method}
        _put_raw(out, "params", self.params)
        return out


@dataclass
class Response:
    """A reply; result holds raw JSON text."""

    jsonrpc: str
    id: IntString | None = None
    result: str | None = None
    error: JSONRPCError | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"jsonrpc": self.jsonrpc}
        if self.id is not None:
            out["id"] = self.id.to_python()
        _put_raw(out, "result", self.result)
        if self.error is not None:
            out["error"] = self.error.to_dict()
        return out


@dataclass
class UnionRequest:
    """Any incoming message before its kind is known."""

    jsonrpc: str
    id: IntString | None = None
    method: str | None = None
    params: str | None = None
    result: str | None = None
    error: JSONRPCError | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"jsonrpc": self.jsonrpc}
        if self.id is not None:
            out["id"] = self.id.to_python()
        if self.method is not None:
            out["method"] = self.method
        _put_raw(out, "params", self.params)
        _put_raw(out, "result", self.result)
        if self.error is not None:
            out["error"] = self.error.to_dict()
        return out


def _kind(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"


def _object(data: Any, name: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise ValueError(f"cannot unmarshal {_kind(data)} into value of type {name}")
    return data


def _string(obj: dict[str, Any], key: str, optional: bool = False) -> str | None:
    value = obj.get(key)
    if value is None:
        return None if optional else ""
    if not isinstance(value, str):
        raise ValueError(f"cannot unmarshal {_kind(value)} into field {key} of type string")
    return value


def _raw(obj: dict[str, Any], key: str) -> str | None:
    return dumps(obj[key]) if key in obj else None


def _optional_id(obj: dict[str, Any]) -> IntString | None:
    value = obj.get("id")
    return None if value is None else coerce_int_string(value)


def _optional_error(obj: dict[str, Any]) -> JSONRPCError | None:
    value = obj.get("error")
    return None if value is None else error_from_dict(value)


def request_from_dict(data: Any) -> Request:
    obj = _object(data, "Request")
    request_id = coerce_int_string(obj["id"]) if "id" in obj else IntString(None)
    return Request(_string(obj, "jsonrpc"), request_id, _string(obj, "method"), _raw(obj, "params"))


def response_from_dict(data: Any) -> Response:
    obj = _object(data, "Response")
    return Response(
        _string(obj, "jsonrpc"), _optional_id(obj), _raw(obj, "result"), _optional_error(obj)
    )


def union_request_from_dict(data: Any) -> UnionRequest:
    obj = _object(data, "UnionRequest")
    return UnionRequest(
        jsonrpc=_string(obj, "jsonrpc"),
        id=_optional_id(obj),
        method=_string(obj, "method", optional=True),
        params=_raw(obj, "params"),
        result=_raw(obj, "result"),
        error=_optional_error(obj),
    )