"""Handlers for method calls, notifications and responses."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

from .codec import dumps, loads
from .context import request_context
from .errors import ErrorCode, JSONRPCError, default_error_message
from .intstring import IntString
from .spec import (
    JSONRPC_VERSION,
    MessageType,
    Notification,
    Request,
    Response,
    UnionRequest,
)

__all__ = [
    "MethodHandler",
    "NotificationHandler",
    "ResponseHandler",
    "handle_method",
    "handle_notification",
    "handle_response",
]

Parser = Callable[[Any], Any]


def _decode(raw: str | None, parse: Optional[Parser]) -> Any:
    """Decode raw JSON text; absent data gives None without parsing."""
    if raw is None:
        return None
    value = loads(raw)
    return parse(value) if parse is not None else value


def _plain(value: Any) -> Any:
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    return value


def _error_response(request_id: IntString | None, code: int, message: str) -> Response:
    return Response(JSONRPC_VERSION, request_id, error=JSONRPCError(code, message))


def _with_default(code: ErrorCode, detail: str) -> str:
    return f"{default_error_message(code)}: {detail}"


@dataclass
class MethodHandler:
    """Handles calls that expect a response.

    ``parse_params`` turns decoded params into the endpoint's argument and
    should raise ValueError or TypeError on bad input. Absent params reach
    the endpoint as None.
    """

    endpoint: Callable[[Any], Any]
    parse_params: Optional[Parser] = None

    def handle(self, request: Request) -> Response:
        try:
            params = _decode(request.params, self.parse_params)
        except (ValueError, TypeError) as exc:
            return _error_response(
                request.id, ErrorCode.INVALID_PARAMS, _with_default(ErrorCode.INVALID_PARAMS, str(exc))
            )

        try:
            result = self.endpoint(params)
        except JSONRPCError as exc:
            return Response(JSONRPC_VERSION, request.id, error=exc)
        except Exception as exc:  # endpoint failures become error responses
            return _error_response(
                request.id, ErrorCode.INTERNAL_ERROR, _with_default(ErrorCode.INTERNAL_ERROR, str(exc))
            )

        try:
            encoded = dumps(_plain(result))
        except (TypeError, ValueError) as exc:
            return _error_response(
                request.id,
                ErrorCode.INTERNAL_ERROR,
                _with_default(ErrorCode.INTERNAL_ERROR, f"Error marshaling result: {exc}"),
            )
        return Response(JSONRPC_VERSION, request.id, result=encoded)


@dataclass
class NotificationHandler:
    """Handles calls that expect no response; failures are raised to the caller."""

    endpoint: Callable[[Any], Any]
    parse_params: Optional[Parser] = None

    def handle(self, notification: Notification) -> None:
        params = _decode(notification.params, self.parse_params)
        self.endpoint(params)


@dataclass
class ResponseHandler:
    """Handles responses received from a peer.

    The endpoint is called with ``(result, error)``: the error object when
    the response carries one, otherwise the parsed result.
    """

    endpoint: Callable[[Any, Optional[JSONRPCError]], Any]
    parse_result: Optional[Parser] = None

    def handle(self, response: Response) -> None:
        if response.error is not None:
            self.endpoint(None, response.error)
            return
        result = _decode(response.result, self.parse_result)
        self.endpoint(result, None)


def handle_method(request: UnionRequest, method_map: Mapping[str, MethodHandler]) -> Response:
    """Dispatch a call to its handler and return the response to send."""
    method = request.method or ""
    handler = method_map.get(method)
    if handler is None:
        return _error_response(
            request.id,
            ErrorCode.METHOD_NOT_FOUND,
            _with_default(ErrorCode.METHOD_NOT_FOUND, method),
        )
    if request.id is None:
        return _error_response(
            request.id,
            ErrorCode.INVALID_REQUEST,
            f"{default_error_message(ErrorCode.PARSE_ERROR)}: "
            f"Received no requestID for method: '{method}'",
        )
    with request_context(method, MessageType.METHOD, request.id):
        return handler.handle(Request(request.jsonrpc, request.id, method, request.params))


def handle_notification(
    request: UnionRequest, notification_map: Mapping[str, NotificationHandler]
) -> None:
    """Dispatch a notification; raises when it cannot be handled."""
    method = request.method or ""
    handler = notification_map.get(method)
    if handler is None:
        raise JSONRPCError(
            ErrorCode.METHOD_NOT_FOUND,
            f"{default_error_message(ErrorCode.METHOD_NOT_FOUND)}: Notification{method}",
        )
    with request_context(method, MessageType.NOTIFICATION, None):
        handler.handle(Notification(request.jsonrpc, method, request.params))


def handle_response(
    request: UnionRequest,
    response_map: Mapping[str, ResponseHandler],
    mapper: Callable[[Response], str],
) -> None:
    """Route a received response to the handler chosen by ``mapper``."""
    response = Response(request.jsonrpc, request.id, request.result, request.error)
    try:
        method = mapper(response)
    except Exception as exc:
        raise JSONRPCError(
            ErrorCode.INTERNAL_ERROR, _with_default(ErrorCode.INTERNAL_ERROR, str(exc))
        ) from exc
    handler = response_map.get(method)
    if handler is None:
        raise JSONRPCError(
            ErrorCode.METHOD_NOT_FOUND, _with_default(ErrorCode.METHOD_NOT_FOUND, method)
        )
    with request_context(method, MessageType.RESPONSE, request.id):
        handler.handle(response)