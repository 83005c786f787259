import json
import logging

import pytest

from chatwire.exceptions import EncodeNotSupportedError
from chatwire.exceptions import FunctionCallDecodeError
from chatwire.exceptions import UnsupportedArgumentKindError
from chatwire.json.function_call import DecoderConfig
from chatwire.json.function_call import FunctionCallDecoder
from chatwire.json.function_call import decode_function_call
from chatwire.json.function_call import encode_function_call
from chatwire.json.reader import JsonTokenReader
from chatwire.json.reader import JsonTokenType
from chatwire.types.function_call import ArgumentDefinition
from chatwire.types.function_call import ArgumentType
from chatwire.types.function_call import FunctionCall


def _wire(name: str, arguments: str) -> str:
    return json.dumps({"name": name, "arguments": arguments})


def test_decode_weather_call() -> None:
    call = decode_function_call(_wire("get_weather", '{"city": "Paris", "days": 3}'))

    assert call == FunctionCall(
        name="get_weather",
        arguments=(
            ArgumentDefinition("city", ArgumentType.STRING, "Paris"),
            ArgumentDefinition("days", ArgumentType.NUMBER, 3.0),
        ),
    )


def test_argument_count_and_values() -> None:
    inner = {"a": "x", "b": 2.5, "c": -7, "d": ""}
    call = decode_function_call(_wire("f", json.dumps(inner)))

    assert call.name == "f"
    assert len(call.arguments) == len(inner)
    assert call.to_kwargs() == {"a": "x", "b": 2.5, "c": -7.0, "d": ""}


def test_argument_order_is_preserved() -> None:
    call = decode_function_call(_wire("f", '{"z": 1, "a": "two", "m": 3}'))

    assert [arg.name for arg in call.arguments] == ["z", "a", "m"]


def test_empty_arguments() -> None:
    call = decode_function_call(_wire("ping", ""))

    assert call.name == "ping"
    assert call.arguments == ()


def test_empty_object_arguments() -> None:
    call = decode_function_call(_wire("ping", "{}"))

    assert call.arguments == ()


def test_number_and_string_types() -> None:
    call = decode_function_call(_wire("f", '{"x": 1, "city": "Paris", "n": "1"}'))
    x, city, n = call.arguments

    assert x.type == ArgumentType.NUMBER
    assert x.value == 1.0
    assert isinstance(x.value, float)
    assert city.type == ArgumentType.STRING
    assert city.value == "Paris"
    assert n.type == ArgumentType.STRING
    assert n.value == "1"


def test_escaped_wire_payload() -> None:
    raw = r'{"name": "get_weather", "arguments": "{\"x\": 1, \"city\": \"Paris\"}"}'
    call = decode_function_call(raw)

    assert call.to_kwargs() == {"x": 1.0, "city": "Paris"}


def test_wrong_key_order() -> None:
    raw = json.dumps({"arguments": "{}", "name": "f"})

    with pytest.raises(FunctionCallDecodeError, match="name"):
        decode_function_call(raw)


@pytest.mark.parametrize(
    "raw",
    [
        '{"name": 1, "arguments": ""}',
        '{"name": "f", "args": ""}',
        '{"name": "f", "arguments": {"x": 1}}',
        '{"name": "f", "arguments": "", "extra": 1}',
        '{"name": "f"}',
        '["name", "arguments"]',
    ],
)
def test_structural_mismatch(raw: str) -> None:
    with pytest.raises(FunctionCallDecodeError):
        decode_function_call(raw)


@pytest.mark.parametrize("arguments", ['{"x": ', "[1, 2]", "42", '"text"', '{"a": 1} x'])
def test_invalid_arguments_payload(arguments: str) -> None:
    with pytest.raises(FunctionCallDecodeError):
        decode_function_call(_wire("f", arguments))


def test_unsupported_values_are_dropped(caplog: pytest.LogCaptureFixture) -> None:
    inner = '{"a": true, "b": null, "c": {"d": 1}, "e": [1, 2], "f": "kept", "g": false}'

    with caplog.at_level(logging.WARNING, logger="chatwire.json.function_call"):
        call = decode_function_call(_wire("f", inner))

    assert call.arguments == (ArgumentDefinition("f", ArgumentType.STRING, "kept"),)
    dropped = [r for r in caplog.records if r.name == "chatwire.json.function_call"]
    assert len(dropped) == 5
    assert "TRUE" in dropped[0].getMessage()


def test_nested_keys_are_not_arguments() -> None:
    call = decode_function_call(_wire("f", '{"outer": {"inner": 1}, "x": 2}'))

    assert call.to_kwargs() == {"x": 2.0}


def test_strict_rejects_unsupported_values() -> None:
    config = DecoderConfig(strict=True)

    with pytest.raises(UnsupportedArgumentKindError, match="flag"):
        decode_function_call(_wire("f", '{"x": 1, "flag": true}'), config=config)


def test_decoder_accepts_reader_on_start_object() -> None:
    reader = JsonTokenReader(_wire("f", '{"x": 1}'))
    reader.read()
    assert reader.token_type is JsonTokenType.START_OBJECT

    call = FunctionCallDecoder().decode(reader)

    assert call.to_kwargs() == {"x": 1.0}
    assert reader.token_type is JsonTokenType.END_OBJECT


def test_decoder_leaves_reader_after_object() -> None:
    raw = '{"call": ' + _wire("f", "") + ', "after": "yes"}'
    reader = JsonTokenReader(raw)
    reader.read()
    reader.read()
    assert reader.get_string() == "call"

    call = FunctionCallDecoder().decode(reader)

    assert call.name == "f"
    reader.read()
    assert reader.get_string() == "after"


def test_decode_arguments_directly() -> None:
    decoder = FunctionCallDecoder()

    assert decoder.decode_arguments('{"q": "ß", "n": 0}') == (
        ArgumentDefinition("q", ArgumentType.STRING, "ß"),
        ArgumentDefinition("n", ArgumentType.NUMBER, 0.0),
    )


def test_decoders_are_independent() -> None:
    first = decode_function_call(_wire("a", '{"x": 1}'))
    second = decode_function_call(_wire("b", '{"y": "2"}'))

    assert first.to_kwargs() == {"x": 1.0}
    assert second.to_kwargs() == {"y": "2"}


def test_function_call_get() -> None:
    call = decode_function_call(_wire("f", '{"a": 1, "a": 2, "b": "x"}'))

    assert len(call.arguments) == 3
    assert call.get("a") == 1.0
    assert call.get("missing") is None
    assert call.get("missing", "d") == "d"
    assert call.to_kwargs() == {"a": 2.0, "b": "x"}


@pytest.mark.parametrize(
    "call",
    [
        FunctionCall(name="f"),
        FunctionCall(name="f", arguments=(ArgumentDefinition("x", ArgumentType.NUMBER, 1.0),)),
    ],
)
def test_encode_is_not_supported(call: FunctionCall) -> None:
    with pytest.raises(EncodeNotSupportedError):
        encode_function_call(call)


def test_encode_error_is_not_implemented() -> None:
    with pytest.raises(NotImplementedError):
        encode_function_call(FunctionCall(name=""))


def test_large_and_exponent_numbers() -> None:
    call = decode_function_call(
        _wire("f", '{"id": 12345678901234567890123, "big": 1.5e3, "tiny": -2E-2}')
    )

    assert call.arguments == (
        ArgumentDefinition("id", ArgumentType.NUMBER, 1.2345678901234568e22),
        ArgumentDefinition("big", ArgumentType.NUMBER, 1500.0),
        ArgumentDefinition("tiny", ArgumentType.NUMBER, -0.02),
    )
    assert all(isinstance(arg.value, float) for arg in call.arguments)


def test_non_ascii_arguments() -> None:
    raw = json.dumps(
        {"name": "get_weather", "arguments": json.dumps({"city": "Zürich"}, ensure_ascii=False)},
        ensure_ascii=False,
    )

    assert decode_function_call(raw).to_kwargs() == {"city": "Zürich"}
    assert decode_function_call(raw.encode("utf-8")).to_kwargs() == {"city": "Zürich"}
    assert decode_function_call(_wire("f", '{"city": "東京"}')).to_kwargs() == {"city": "東京"}
