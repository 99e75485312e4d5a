# rpcbatch

`rpcbatch` is a small library for handling JSON-RPC 2.0 messages. It has the
message types from the specification, decodes single messages and batches,
routes each message to the handler registered for it, and builds the
responses that go back to the client.

It has no third-party dependencies.

## Modules

- `rpcbatch.codec`: `loads` and `dumps`. `loads` decodes JSON text and
  rejects `NaN` and `Infinity`. Malformed input raises `JSONSyntaxError`, a
  subclass of `ValueError`. `dumps` writes compact JSON with `&`, `<` and `>`
  escaped as `\u0026`, `\u003c` and `\u003e`.
- `rpcbatch.errors`: `ErrorCode` lists the standard codes. `JSONRPCError` is
  both an exception and the specification's error object, with `code`,
  `message`, `data` and `to_dict()`. `default_error_message(code)` returns the
  standard text for a code, or `""` for any other code. `error_from_dict`
  builds an error from decoded JSON.
- `rpcbatch.intstring`: `IntString` holds a request id that is either an
  integer or a string. It has `is_int`, `is_string`, `int_value`,
  `string_value` (each value method returns `None` when the kind does not
  match), `to_python` and `to_json`. `parse_int_string` reads one from JSON
  text, and `coerce_int_string` wraps an already decoded value. Both reject
  `null`, floats, booleans, arrays and objects with `ValueError`.
- `rpcbatch.spec`: `Request`, `Notification`, `Response` and `UnionRequest`.
  Params and results are kept as raw JSON text. `UnionRequest` is the
  "anything that can arrive" shape that the dispatcher inspects. `MessageType`
  tells apart requests, notifications, responses and invalid messages.
  `request_from_dict`, `response_from_dict` and `union_request_from_dict`
  build messages from decoded JSON.
- `rpcbatch.batchitem`: `BatchItem` holds a list of items and remembers
  whether they came as one object or as an array (`is_batch`). `to_json`
  writes them back in the same form: an array, the single item, or `null`
  when there are no items and it is not a batch. `decode_batch_request` and
  `decode_batch_response` decode incoming text. `decode_batch_item` and
  `encode_batch_item` do the same for any item type.
- `rpcbatch.handlers`: `MethodHandler` is for calls that expect a result,
  `NotificationHandler` is for fire-and-forget calls, and `ResponseHandler` is
  for responses that come back from a peer. `handle_method`,
  `handle_notification` and `handle_response` dispatch one `UnionRequest` to
  the matching handler.
- `rpcbatch.context`: while a handler runs, `get_method_name`,
  `get_message_type` and `get_request_id` tell it which message is being
  processed. `request_context` sets these values for a block.
- `rpcbatch.batch`: `BatchRequestHandler.handle` takes a decoded batch and
  returns the batch of responses. `detect_message_type` classifies one
  message.
- `rpcbatch.adapter`: `make_error_handler` turns transport-level failures into
  JSON-RPC error responses wrapped in `ResponseStatusError`.
  `default_operation` describes the conventional single `POST /jsonrpc`
  endpoint as an `Operation`.

## Dispatching a batch

```python
from rpcbatch.batch import BatchRequestHandler
from rpcbatch.batchitem import decode_batch_request
from rpcbatch.handlers import MethodHandler, NotificationHandler


def add(params):
    return {"sum": params["a"] + params["b"]}


dispatcher = BatchRequestHandler(
    method_map={"add": MethodHandler(add)},
    notification_map={"log": NotificationHandler(print)},
)

batch = decode_batch_request(
    '{"jsonrpc": "2.0", "method": "add", "params": {"a": 1, "b": 2}, "id": 1}'
)
reply = dispatcher.handle(batch)
print(reply.to_json())  # {"jsonrpc":"2.0","id":1,"result":{"sum":3}}
```

An endpoint takes one argument: the decoded params, or `None` when the
message has none. Pass `parse_params` to a `MethodHandler` or
`NotificationHandler` to turn the decoded params into your own type. It should
raise `ValueError` or `TypeError` on bad input. The return value of a method
endpoint is encoded as the result. Objects with a `to_dict()` method and
dataclass instances are turned into plain JSON first.

A `ResponseHandler` endpoint is called as `endpoint(result, error)`. To route
incoming responses, give `BatchRequestHandler` a `response_map` and a
`response_mapper`. The mapper receives each `Response` and returns the name of
the handler to use. Without a mapper, incoming responses are ignored.

`handle` returns `None` when nothing needs to be sent back, for example when
the batch held only notifications. When it receives `None` or a batch with no
items, it returns a single parse-error response with the message
"No input received".

## Request ids

```python
from rpcbatch.intstring import parse_int_string

request_id = parse_int_string("42")
print(request_id.is_int(), request_id.int_value())  # True 42

request_id = parse_int_string('"abc"')
print(request_id.is_string(), request_id.to_json())  # True "abc"
```

## Error behaviour

`decode_batch_request` and `decode_batch_response` first check that the input
is well-formed JSON. Empty or malformed text raises `JSONSyntaxError` with
messages such as "unexpected end of JSON input" or "invalid character 'g'
looking for beginning of value". After that check, the following raise
`JSONRPCError` with the parse-error code:

- `null`;
- a `null` item inside an array;
- an item of the wrong shape.

`decode_batch_item` has no JSON pre-check. It reports empty and malformed
input as `JSONRPCError` parse errors too.

Problems with a single message do not raise. Each one becomes an error
response for that message:

- a wrong `jsonrpc` version;
- a message that has `method` together with `result` or `error`;
- a message that has both `result` and `error`;
- a response without an id;
- an unknown method;
- params that the handler cannot decode.

A method endpoint that raises `JSONRPCError` has that error sent back
unchanged. Any other exception is reported as an internal error, and its
message is appended to the standard text. Failures inside notification and
response handlers are logged at debug level and never answered.

## What it does not do

The package includes no HTTP server and does not register itself with any
web framework. You read the request body, call `decode_batch_request` and
`BatchRequestHandler.handle`, and write `to_json()` of the result yourself.
`make_error_handler` and `default_operation` only build values for your
framework to use. The package also generates no OpenAPI or JSON Schema
documents.

## Running the tests

```
pip install -e ".[test]"
pytest
```