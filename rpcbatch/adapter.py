"""HTTP-facing pieces: the default endpoint description and error conversion."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from .codec import dumps
from .errors import ErrorCode, JSONRPCError, default_error_message
from .handlers import MethodHandler, NotificationHandler
from .spec import JSONRPC_VERSION, Response

__all__ = ["Operation", "ResponseStatusError", "default_operation", "make_error_handler"]

_PARSE_HINTS = ("unmarshal", "invalid character", "unexpected end")
_METHOD_NAME = re.compile(r"[^ \])]*")


@dataclass
class Operation:
    """Description of the HTTP endpoint serving JSON-RPC."""

    method: str
    path: str
    default_status: int = 200
    tags: list[str] = field(default_factory=list)
    summary: str = ""
    description: str = ""
    operation_id: str = ""


def default_operation() -> Operation:
    """Return the conventional single-endpoint description."""
    return Operation(
        method="POST",
        path="/jsonrpc",
        default_status=200,
        tags=["JSONRPC"],
        summary="JSONRPC endpoint",
        description="Serve all jsonrpc methods",
        operation_id="jsonrpc",
    )


class ResponseStatusError(Exception):
    """An HTTP-level failure carried as a JSON-RPC error response."""

    def __init__(self, response: Response, status: int = 200) -> None:
        super().__init__(response.error.message if response.error is not None else "")
        self.response = response
        self.status = status

    def __str__(self) -> str:
        return self.response.error.message if self.response.error is not None else ""

    def to_dict(self) -> dict[str, Any]:
        return self.response.to_dict()


def _detail_message(err: BaseException) -> str | None:
    detail_of = getattr(err, "error_detail", None)
    if not callable(detail_of):
        return None
    detail = detail_of()
    return str(getattr(detail, "message", detail))


def _method_in(details: list[str]) -> str:
    for text in details:
        idx = text.find("method:")
        if idx != -1:
            return _METHOD_NAME.match(text, idx + len("method:")).group()
    return ""


def make_error_handler(
    method_map: Mapping[str, MethodHandler],
    notification_map: Mapping[str, NotificationHandler],
) -> Callable[..., ResponseStatusError]:
    """Build a converter from an HTTP failure to a JSON-RPC error response.

    The returned callable takes ``(status, message, *errors)``. Errors that
    provide ``error_detail()`` are inspected for JSON parse failures;
    JSONRPCError instances supply the code and message directly.
    """

    def handler(status: int, message: str, *errors: BaseException) -> ResponseStatusError:
        details = [f"Message:{message}", f"HTTP Status:{status}"]
        text = message
        code: int = ErrorCode.INTERNAL_ERROR
        if 400 <= status < 500:
            code = ErrorCode.INVALID_REQUEST
            text = default_error_message(ErrorCode.INVALID_REQUEST)

        found: JSONRPCError | None = None
        for err in errors:
            detail = _detail_message(err)
            if detail is not None:
                if any(hint in detail for hint in _PARSE_HINTS):
                    code = ErrorCode.PARSE_ERROR
                    text = default_error_message(ErrorCode.PARSE_ERROR)
            elif isinstance(err, JSONRPCError):
                found = err
            details.append(str(err))

        if found is not None:
            text = found.message
            code = found.code
            try:
                details.append(dumps(found.data))
            except (TypeError, ValueError):
                pass

        if message == "validation failed":
            name = _method_in(details)
            if name and name not in method_map and name not in notification_map:
                code = ErrorCode.METHOD_NOT_FOUND
                text = f"Method '{name}' not found"

        response = Response(
            JSONRPC_VERSION, None, error=JSONRPCError(code, text, details)
        )
        return ResponseStatusError(response, 200)

    return handler