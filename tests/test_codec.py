import pytest

from rpcbatch.codec import JSONSyntaxError, dumps, loads


@pytest.mark.parametrize("text", ["", "   ", '{"name": "Item1", "value": 100'])
def test_loads_unexpected_end(text):
    with pytest.raises(JSONSyntaxError, match="unexpected end of JSON input"):
        loads(text)


def test_loads_bad_object_key():
    with pytest.raises(JSONSyntaxError) as info:
        loads("{this is not valid JSON}")
    assert str(info.value) == "invalid character 't' looking for beginning of object key string"


def test_loads_garbage():
    with pytest.raises(JSONSyntaxError) as info:
        loads("garbage data")
    assert str(info.value) == "invalid character 'g' looking for beginning of value"


def test_loads_rejects_nan():
    with pytest.raises(JSONSyntaxError, match="invalid character"):
        loads("NaN")


def test_loads_accepts_bytes():
    assert loads(b'[1,2,3]') == [1, 2, 3]


def test_dumps_escapes_ampersand():
    assert dumps("special_chars!@#$%^&*()") == '"special_chars!@#$%^\\u0026*()"'


def test_dumps_is_compact():
    assert dumps({"jsonrpc": "2.0", "id": 1}) == '{"jsonrpc":"2.0","id":1}'


@pytest.mark.parametrize("value", [{"a": [1, "x<y>"]}, "こんにちは", None, [], -42])
def test_round_trip(value):
    assert loads(dumps(value)) == value