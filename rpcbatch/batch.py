"""Dispatching of single and batched JSON-RPC messages."""

from __future__ import annotations

import logging
from typing import Callable, Mapping, Optional

from .batchitem import BatchItem
from .errors import ErrorCode, JSONRPCError, default_error_message
from .handlers import (
    MethodHandler,
    NotificationHandler,
    ResponseHandler,
    handle_method,
    handle_notification,
    handle_response,
)
from .spec import JSONRPC_VERSION, MessageType, Response, UnionRequest

__all__ = ["BatchRequestHandler"]

_log = logging.getLogger(__name__)


def _invalid(code: ErrorCode, detail: str) -> JSONRPCError:
    return JSONRPCError(code, f"{default_error_message(code)}: {detail}")


class BatchRequestHandler:
    """Routes each incoming message to a method, notification or response handler.

    Responses to a peer are only dispatched when ``response_mapper`` is given;
    it names the entry of ``response_map`` that should handle each response.
    """

    def __init__(
        self,
        method_map: Optional[Mapping[str, MethodHandler]] = None,
        notification_map: Optional[Mapping[str, NotificationHandler]] = None,
        response_map: Optional[Mapping[str, ResponseHandler]] = None,
        response_mapper: Optional[Callable[[Response], str]] = None,
    ) -> None:
        self.method_map = dict(method_map or {})
        self.notification_map = dict(notification_map or {})
        self.response_map = dict(response_map or {})
        self.response_mapper = response_mapper

    def handle(self, batch: Optional[BatchItem[UnionRequest]]) -> Optional[BatchItem[Response]]:
        """Process every message and return the responses to send, or None."""
        if batch is None or not batch.items:
            error = _invalid(ErrorCode.PARSE_ERROR, "No input received")
            return BatchItem(False, [Response(JSONRPC_VERSION, None, error=error)])

        responses: list[Response] = []
        for request in batch.items:
            try:
                kind = self.detect_message_type(request)
            except JSONRPCError as exc:
                responses.append(Response(JSONRPC_VERSION, request.id, error=exc))
                continue

            if kind is MessageType.METHOD:
                responses.append(handle_method(request, self.method_map))
            elif kind is MessageType.NOTIFICATION:
                try:
                    handle_notification(request, self.notification_map)
                except Exception as exc:  # a notification never gets a reply
                    _log.debug("notification %r failed: %s", request.method, exc)
            elif kind is MessageType.RESPONSE and self.response_mapper is not None:
                try:
                    handle_response(request, self.response_map, self.response_mapper)
                except Exception as exc:  # a response never gets a reply
                    _log.debug("response %r failed: %s", request.id, exc)

        if not responses:
            return None
        return BatchItem(batch.is_batch, responses)

    def detect_message_type(self, request: UnionRequest) -> MessageType:
        """Classify a message, raising JSONRPCError when it is malformed."""
        if request.jsonrpc != JSONRPC_VERSION:
            raise _invalid(
                ErrorCode.INVALID_REQUEST, f"Invalid JSON-RPC version: '{request.jsonrpc}'"
            )

        has_answer = request.result is not None or request.error is not None
        if request.method is not None:
            if has_answer:
                raise _invalid(
                    ErrorCode.INVALID_REQUEST,
                    "Invalid message: 'method' cannot coexist with 'result' or 'error'",
                )
            return MessageType.METHOD if request.id is not None else MessageType.NOTIFICATION

        if has_answer:
            if request.result is not None and request.error is not None:
                raise _invalid(
                    ErrorCode.INTERNAL_ERROR,
                    "Invalid message: 'result' and 'error' cannot coexist",
                )
            if request.id is not None:
                return MessageType.RESPONSE
            raise _invalid(ErrorCode.INTERNAL_ERROR, "Invalid response: missing 'id'")

        raise _invalid(
            ErrorCode.INVALID_REQUEST,
            "Unknown message type: missing both 'method' and 'result'/'error'",
        )