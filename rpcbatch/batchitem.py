"""Single-or-batch containers for JSON-RPC payloads."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Iterable, TypeVar

from .codec import JSONSyntaxError, dumps, loads
from .errors import ErrorCode, JSONRPCError, default_error_message
from .spec import Response, UnionRequest, response_from_dict, union_request_from_dict

__all__ = [
    "BatchItem",
    "decode_batch_item",
    "encode_batch_item",
    "decode_batch_request",
    "decode_batch_response",
]

T = TypeVar("T")


def _parse_error(detail: str) -> JSONRPCError:
    return JSONRPCError(
        ErrorCode.PARSE_ERROR, f"{default_error_message(ErrorCode.PARSE_ERROR)}: {detail}"
    )


def _check_empty_or_null(text: str) -> None:
    text = text.strip()
    if not text:
        raise _parse_error("Received empty data")
    if text == "null":
        raise _parse_error("Received null data")


def _plain(item: Any) -> Any:
    to_dict = getattr(item, "to_dict", None)
    return to_dict() if callable(to_dict) else item


@dataclass
class BatchItem(Generic[T]):
    """Items that arrived, or are to be sent, as one object or as an array."""

    is_batch: bool = False
    items: list[T] = field(default_factory=list)

    def to_json(self) -> str:
        return encode_batch_item(self.is_batch, self.items)


def decode_batch_item(data: str | bytes, parse_item: Callable[[Any], T]) -> BatchItem[T]:
    """Decode one object or an array of objects using parse_item for each."""
    text = bytes(data).decode("utf-8") if isinstance(data, (bytes, bytearray)) else data
    _check_empty_or_null(text)
    try:
        value = loads(text)
    except JSONSyntaxError as exc:
        raise _parse_error(f"Failed to unmarshal single item: {exc}") from None

    if isinstance(value, list):
        items = []
        for element in value:
            if element is None:
                raise _parse_error("Received null data")
            try:
                items.append(parse_item(element))
            except ValueError as exc:
                raise _parse_error(f"Failed to unmarshal batch item: {exc}") from None
        return BatchItem(True, items)

    try:
        return BatchItem(False, [parse_item(value)])
    except ValueError as exc:
        raise _parse_error(f"Failed to unmarshal single item: {exc}") from None


def encode_batch_item(is_batch: bool, items: Iterable[Any]) -> str:
    """Encode items as an array, as the first item alone, or as null."""
    plain = [_plain(item) for item in items]
    if is_batch:
        return dumps(plain)
    return dumps(plain[0] if plain else None)


def _validated(data: str | bytes) -> str | bytes:
    loads(data)
    return data


def decode_batch_request(data: str | bytes) -> BatchItem[UnionRequest]:
    """Decode incoming request text, failing first on malformed JSON."""
    return decode_batch_item(_validated(data), union_request_from_dict)


def decode_batch_response(data: str | bytes) -> BatchItem[Response]:
    """Decode incoming response text, failing first on malformed JSON."""
    return decode_batch_item(_validated(data), response_from_dict)