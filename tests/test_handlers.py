from dataclasses import dataclass

import pytest

from rpcbatch.codec import JSONSyntaxError, loads
from rpcbatch.context import get_message_type, get_method_name, get_request_id
from rpcbatch.errors import ErrorCode, JSONRPCError, default_error_message
from rpcbatch.handlers import (
    MethodHandler,
    NotificationHandler,
    ResponseHandler,
    handle_method,
    handle_notification,
    handle_response,
)
from rpcbatch.intstring import IntString
from rpcbatch.spec import JSONRPC_VERSION, MessageType, Notification, Request, Response, UnionRequest


@dataclass
class AddParams:
    a: int
    b: int


@dataclass
class AddResult:
    sum: int


class _ContextProbe(Exception):
    pass


def parse_add(value):
    if not isinstance(value, dict):
        raise TypeError("params must be an object")
    for key in ("a", "b"):
        if not isinstance(value.get(key), int):
            raise ValueError(f"field {key} must be an integer")
    return AddParams(value["a"], value["b"])


def add_endpoint(params):
    return AddResult(params.a + params.b)


def add_handler():
    return MethodHandler(add_endpoint, parse_add)


def call(method, params, request_id=1):
    return UnionRequest(
        JSONRPC_VERSION,
        id=None if request_id is None else IntString(request_id),
        method=method,
        params=params,
    )


def test_method_handler_success():
    resp = add_handler().handle(Request(JSONRPC_VERSION, IntString(1), "add", '{"a":2,"b":3}'))
    assert resp.error is None
    assert resp.id == IntString(1)
    assert loads(resp.result) == {"sum": 5}


def test_method_handler_string_result():
    handler = MethodHandler(lambda p: p["s1"] + p["s2"])
    resp = handler.handle(
        Request(JSONRPC_VERSION, IntString(2), "concat", '{"s1":"hello","s2":"world"}')
    )
    assert loads(resp.result) == "helloworld"


def test_method_handler_malformed_params():
    resp = add_handler().handle(Request(JSONRPC_VERSION, IntString(4), "add", "invalid"))
    assert resp.error.code == ErrorCode.INVALID_PARAMS
    assert resp.error.message == (
        default_error_message(ErrorCode.INVALID_PARAMS)
        + ": invalid character 'i' looking for beginning of value"
    )
    assert resp.id == IntString(4)


def test_method_handler_params_rejected_by_parser():
    resp = add_handler().handle(Request(JSONRPC_VERSION, IntString(1), "add", '{"a":"one","b":2}'))
    assert resp.error.code == ErrorCode.INVALID_PARAMS
    assert resp.error.message == (
        default_error_message(ErrorCode.INVALID_PARAMS) + ": field a must be an integer"
    )
    assert resp.result is None


def test_method_handler_plain_exception_becomes_internal_error():
    def failing(_params):
        raise RuntimeError("intentional error")

    resp = MethodHandler(failing, parse_add).handle(
        Request(JSONRPC_VERSION, IntString(1), "x", '{"a":1,"b":2}')
    )
    assert resp.error == JSONRPCError(
        ErrorCode.INTERNAL_ERROR,
        default_error_message(ErrorCode.INTERNAL_ERROR) + ": intentional error",
    )


def test_method_handler_jsonrpc_error_passes_through():
    def failing(_params):
        raise JSONRPCError(1234, "Custom error")

    resp = MethodHandler(failing).handle(Request(JSONRPC_VERSION, IntString(1), "x", "{}"))
    assert resp.error == JSONRPCError(1234, "Custom error")
    assert resp.id == IntString(1)


def test_method_handler_unencodable_result():
    resp = MethodHandler(lambda _p: object()).handle(
        Request(JSONRPC_VERSION, IntString(1), "x", None)
    )
    assert resp.error.code == ErrorCode.INTERNAL_ERROR
    assert resp.error.message.startswith(
        default_error_message(ErrorCode.INTERNAL_ERROR) + ": Error marshaling result: "
    )


def test_method_handler_absent_params_give_none():
    seen = []
    handler = MethodHandler(lambda p: seen.append(p) or "ok", parse_add)
    resp = handler.handle(Request(JSONRPC_VERSION, IntString(1), "x", None))
    assert seen == [None]
    assert loads(resp.result) == "ok"


def test_handle_method_sets_context():
    seen = {}

    def endpoint(_params):
        seen["method"] = get_method_name()
        seen["type"] = get_message_type()
        seen["id"] = get_request_id()
        return None

    handle_method(call("probe", None, "abc"), {"probe": MethodHandler(endpoint)})
    assert seen == {"method": "probe", "type": MessageType.METHOD, "id": IntString("abc")}
    assert get_method_name() is None


def test_handle_method_dispatches():
    resp = handle_method(call("add", '{"a":1,"b":2}'), {"add": add_handler()})
    assert loads(resp.result) == {"sum": 3}


@pytest.mark.parametrize("method", ["subtract", ""])
def test_handle_method_not_found(method):
    resp = handle_method(call(method, "{}", 2), {"add": add_handler()})
    assert resp.error == JSONRPCError(
        ErrorCode.METHOD_NOT_FOUND,
        default_error_message(ErrorCode.METHOD_NOT_FOUND) + ": " + method,
    )
    assert resp.id == IntString(2)


def test_handle_method_without_id():
    resp = handle_method(call("add", '{"a":1,"b":2}', None), {"add": add_handler()})
    assert resp.error.code == ErrorCode.INVALID_REQUEST
    assert "Received no requestID for method: 'add'" in resp.error.message
    assert resp.id is None


def test_notification_handler_receives_params():
    seen = []
    NotificationHandler(seen.append).handle(
        Notification(JSONRPC_VERSION, "notify", '{"message":"Hello"}')
    )
    assert seen == [{"message": "Hello"}]


def test_handle_notification_sets_context():
    def endpoint(_params):
        raise _ContextProbe(get_method_name(), get_message_type(), get_request_id())

    with pytest.raises(_ContextProbe) as info:
        handle_notification(
            call("ping", '{"message":"hi"}', None), {"ping": NotificationHandler(endpoint)}
        )
    assert info.value.args == ("ping", MessageType.NOTIFICATION, None)
    assert get_method_name() is None


def test_handle_notification_unknown_method():
    with pytest.raises(JSONRPCError) as info:
        handle_notification(call("unknown_notification", "{}", None), {})
    assert info.value.code == ErrorCode.METHOD_NOT_FOUND
    assert info.value.message == (
        default_error_message(ErrorCode.METHOD_NOT_FOUND) + ": Notificationunknown_notification"
    )


def test_handle_notification_bad_params_raise():
    handler = NotificationHandler(lambda p: None)
    with pytest.raises(JSONSyntaxError):
        handle_notification(call("notify", "invalid", None), {"notify": handler})


def test_handle_notification_endpoint_error_propagates():
    def failing(_params):
        raise RuntimeError("processing error")

    with pytest.raises(RuntimeError, match="processing error"):
        handle_notification(call("errornotify", "{}", None), {"errornotify": NotificationHandler(failing)})


def test_response_handler_with_error():
    seen = []
    err = JSONRPCError(ErrorCode.METHOD_NOT_FOUND, "Method not found")
    ResponseHandler(lambda r, e: seen.append((r, e))).handle(
        Response(JSONRPC_VERSION, IntString(2), error=err)
    )
    assert seen == [(None, err)]


def test_response_handler_with_result():
    seen = []
    handler = ResponseHandler(lambda r, e: seen.append((r, e)), lambda v: AddResult(**v))
    handler.handle(Response(JSONRPC_VERSION, IntString(1), result='{"sum":3}'))
    assert seen == [(AddResult(3), None)]


def test_handle_response_routes_with_context():
    seen = []

    def endpoint(result, error):
        seen.append((result, error, get_method_name(), get_message_type(), get_request_id()))

    request = UnionRequest(JSONRPC_VERSION, id=IntString(1), result='{"a":2,"b":3}')
    handle_response(request, {"add": ResponseHandler(endpoint)}, lambda _r: "add")
    assert seen == [({"a": 2, "b": 3}, None, "add", MessageType.RESPONSE, IntString(1))]


def test_handle_response_mapper_failure():
    def mapper(_response):
        raise LookupError("no pending call")

    request = UnionRequest(JSONRPC_VERSION, id=IntString(1), result="7")
    with pytest.raises(JSONRPCError) as info:
        handle_response(request, {}, mapper)
    assert info.value.code == ErrorCode.INTERNAL_ERROR
    assert info.value.message == (
        default_error_message(ErrorCode.INTERNAL_ERROR) + ": no pending call"
    )


def test_handle_response_unknown_method():
    request = UnionRequest(JSONRPC_VERSION, id=IntString(1), result="7")
    with pytest.raises(JSONRPCError) as info:
        handle_response(request, {}, lambda _r: "missing")
    assert info.value.message == (
        default_error_message(ErrorCode.METHOD_NOT_FOUND) + ": missing"
    )


def test_handle_response_passes_full_response_to_mapper():
    seen = []
    request = UnionRequest(JSONRPC_VERSION, id=IntString(9), result="7")

    def mapper(response):
        seen.append(response)
        return "add"

    handle_response(request, {"add": ResponseHandler(lambda r, e: None)}, mapper)
    assert seen == [Response(JSONRPC_VERSION, IntString(9), "7", None)]