"""Per-call JSON-RPC information, visible to handler code while it runs."""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import Any, Iterator

from .intstring import IntString
from .spec import MessageType

__all__ = ["get_request_id", "get_method_name", "get_message_type", "request_context"]

_REQUEST_ID: ContextVar[IntString | None] = ContextVar("jsonrpc_request_id", default=None)
_METHOD_NAME: ContextVar[str | None] = ContextVar("jsonrpc_method_name", default=None)
_MESSAGE_TYPE: ContextVar[MessageType | None] = ContextVar(
    "jsonrpc_message_type", default=None
)


def get_request_id() -> IntString | None:
    """Return the identifier of the call being handled, if it has one."""
    return _REQUEST_ID.get()


def get_method_name() -> str | None:
    """Return the method name of the call being handled."""
    return _METHOD_NAME.get()


def get_message_type() -> MessageType | None:
    """Return the kind of message being handled."""
    return _MESSAGE_TYPE.get()


@contextmanager
def request_context(
    method_name: str,
    message_type: MessageType,
    request_id: IntString | None = None,
) -> Iterator[None]:
    """Make call information available for the duration of the block.

    A request identifier of None leaves any enclosing identifier in place.
    """
    tokens: list[tuple[ContextVar[Any], Token[Any]]] = [
        (_METHOD_NAME, _METHOD_NAME.set(method_name)),
        (_MESSAGE_TYPE, _MESSAGE_TYPE.set(message_type)),
    ]
    if request_id is not None:
        tokens.append((_REQUEST_ID, _REQUEST_ID.set(request_id)))
    try:
        yield
    finally:
        for var, token in reversed(tokens):
            var.reset(token)