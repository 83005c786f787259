from __future__ import annotations

import logging
import typing as t

from chatwire.exceptions import EncodeNotSupportedError
from chatwire.exceptions import FunctionCallDecodeError
from chatwire.exceptions import JsonReaderError
from chatwire.exceptions import UnsupportedArgumentKindError
from chatwire.json.reader import JsonTokenReader
from chatwire.json.reader import JsonTokenType
from chatwire.types.function_call import ArgumentDefinition
from chatwire.types.function_call import ArgumentType
from chatwire.types.function_call import FunctionCall

logger = logging.getLogger("chatwire.json.function_call")


class DecoderConfig(t.NamedTuple):
    """Configuration for FunctionCallDecoder."""

    strict: bool = False
    """Raise on argument values that are neither numbers nor strings instead
    of dropping them."""


class FunctionCallDecoder:
    """Decoder for the ``function_call`` object of a chat completion message.

    The API sends function calls as ``{"name": ..., "arguments": ...}`` where
    ``arguments`` is a JSON object serialized into a string. Decoding takes
    two passes: the outer object is consumed token by token from the caller's
    reader, then the arguments string is tokenized again by a fresh reader.

    Keys of the outer object are expected in the order the API emits them,
    ``name`` then ``arguments``. Any other shape is rejected.

    Argument values are kept when they are numbers (as ``float``) or strings.
    Other values are dropped with a warning, or rejected in strict mode.

    Args:
        config: Decoder configuration. Defaults to ``DecoderConfig()``.

    Example:
        ```python
        decoder = FunctionCallDecoder()
        reader = JsonTokenReader(
            b'{"name": "get_weather", "arguments": "{\\"days\\": 3}"}'
        )
        call = decoder.decode(reader)
        call.arguments[0]  # ArgumentDefinition("days", ArgumentType.NUMBER, 3.0)
        ```
    """

    __slots__ = ("config",)

    def __init__(self, config: DecoderConfig | None = None) -> None:
        self.config = config or DecoderConfig()

    def decode(self, reader: JsonTokenReader) -> FunctionCall:
        """Consume a function call object from ``reader``.

        Args:
            reader: Reader positioned immediately before the object, or on
                its start token.

        Returns:
            The decoded function call.

        Raises:
            FunctionCallDecodeError: If the object or its arguments payload
                does not have the expected structure.
            JsonReaderError: If ``reader`` hits malformed JSON.
        """
        if reader.token_type is not JsonTokenType.START_OBJECT:
            self._expect(reader, JsonTokenType.START_OBJECT)

        self._expect_property(reader, "name")
        self._expect(reader, JsonTokenType.STRING)
        name = reader.get_string()

        self._expect_property(reader, "arguments")
        self._expect(reader, JsonTokenType.STRING)
        payload = reader.get_string()

        arguments = self.decode_arguments(payload) if payload else ()

        self._expect(reader, JsonTokenType.END_OBJECT)

        logger.debug("Decoded function call %s with %s arguments", name, len(arguments))
        return FunctionCall(name=name, arguments=arguments)

    def decode_arguments(self, payload: str) -> tuple[ArgumentDefinition, ...]:
        """Decode the JSON object carried as text in ``arguments``.

        Unlike a lenient reader that would yield no arguments, a payload that
        is valid JSON but not an object (``"[1, 2]"``, ``"42"``) is rejected.

        Args:
            payload: The raw arguments string.

        Returns:
            Arguments in the order their keys appear in ``payload``.

        Raises:
            FunctionCallDecodeError: If ``payload`` is not a JSON object.
            UnsupportedArgumentKindError: In strict mode, if a value is
                neither a number nor a string.
        """
        reader = JsonTokenReader(payload.encode("utf-8"))
        try:
            return tuple(self._read_arguments(reader))
        except JsonReaderError as exc:
            raise FunctionCallDecodeError(f"Invalid arguments payload: {exc}") from exc

    def _read_arguments(self, reader: JsonTokenReader) -> t.Iterator[ArgumentDefinition]:
        if not reader.read() or reader.token_type is not JsonTokenType.START_OBJECT:
            raise FunctionCallDecodeError(
                f"Arguments payload must be a JSON object, got {reader.token_type.name}"
            )

        while reader.read():
            if reader.token_type in (JsonTokenType.START_OBJECT, JsonTokenType.END_OBJECT):
                continue
            if reader.token_type is not JsonTokenType.PROPERTY_NAME or reader.depth != 1:
                continue

            arg_name = reader.get_string()
            if not reader.read():
                raise FunctionCallDecodeError(f"Expected value for argument {arg_name!r}")

            if reader.token_type is JsonTokenType.NUMBER:
                yield ArgumentDefinition(arg_name, ArgumentType.NUMBER, reader.get_double())
            elif reader.token_type is JsonTokenType.STRING:
                yield ArgumentDefinition(arg_name, ArgumentType.STRING, reader.get_string())
            else:
                self._unsupported(reader, arg_name)

    def _unsupported(self, reader: JsonTokenReader, arg_name: str) -> None:
        kind = reader.token_type.name
        if self.config.strict:
            raise UnsupportedArgumentKindError(
                f"Argument {arg_name!r} has unsupported value kind {kind}"
            )
        logger.warning("Dropping argument %s with unsupported value kind %s", arg_name, kind)
        reader.skip()

    @staticmethod
    def _expect(reader: JsonTokenReader, token_type: JsonTokenType) -> None:
        if not reader.read() or reader.token_type is not token_type:
            raise FunctionCallDecodeError(
                f"Expected {token_type.name}, got {reader.token_type.name}"
            )

    @staticmethod
    def _expect_property(reader: JsonTokenReader, name: str) -> None:
        if (
            not reader.read()
            or reader.token_type is not JsonTokenType.PROPERTY_NAME
            or reader.get_string() != name
        ):
            raise FunctionCallDecodeError(f"PropertyName {name!r} expected")


def decode_function_call(
    data: bytes | str,
    *,
    config: DecoderConfig | None = None,
) -> FunctionCall:
    """Decode a standalone function call document.

    Args:
        data: JSON text of the ``function_call`` object.
        config: Decoder configuration.

    Returns:
        The decoded function call.

    Raises:
        FunctionCallDecodeError: If the document has the wrong structure.
        JsonReaderError: If the document is not valid JSON.
    """
    decoder = FunctionCallDecoder(config)
    return decoder.decode(JsonTokenReader(data))


def encode_function_call(call: FunctionCall, /) -> t.NoReturn:
    """Always fails: function calls are only ever received from the API.

    Raises:
        EncodeNotSupportedError: Unconditionally.
    """
    raise EncodeNotSupportedError(
        "Writing a FunctionCall is not supported by the chat completions API, "
        "only the function result needs to be sent"
    )
