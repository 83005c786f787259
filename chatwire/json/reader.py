from __future__ import annotations

import enum
import io
import typing as t

import ijson

from chatwire.exceptions import JsonReaderError


class JsonTokenType(enum.Enum):
    """Kind of token the reader is positioned on."""

    NONE = "none"
    START_OBJECT = "start_object"
    END_OBJECT = "end_object"
    START_ARRAY = "start_array"
    END_ARRAY = "end_array"
    PROPERTY_NAME = "property_name"
    STRING = "string"
    NUMBER = "number"
    TRUE = "true"
    FALSE = "false"
    NULL = "null"


_EVENTS: dict[str, JsonTokenType] = {
    "start_map": JsonTokenType.START_OBJECT,
    "end_map": JsonTokenType.END_OBJECT,
    "start_array": JsonTokenType.START_ARRAY,
    "end_array": JsonTokenType.END_ARRAY,
    "map_key": JsonTokenType.PROPERTY_NAME,
    "string": JsonTokenType.STRING,
    "number": JsonTokenType.NUMBER,
    # Older yajl backends split numbers in two events
    "integer": JsonTokenType.NUMBER,
    "double": JsonTokenType.NUMBER,
    "null": JsonTokenType.NULL,
}

_CONTAINER_START = (JsonTokenType.START_OBJECT, JsonTokenType.START_ARRAY)
_CONTAINER_END = (JsonTokenType.END_OBJECT, JsonTokenType.END_ARRAY)

# The compiled backends overflow on integers outside the int64 range
_BACKEND = ijson.get_backend("python")


class JsonTokenReader:
    """Forward-only cursor over an in-memory JSON document.

    Wraps the event stream of ijson's pure python backend so callers can
    pull one token at a time and inspect its kind and value, without building
    a tree. Nothing is tokenized until ``read`` is called, so syntax errors
    show up on the advance that reaches them.

    Attributes:
        token_type: Kind of the current token. ``NONE`` before the first
            ``read`` and after the end of input.
        depth: Number of containers currently open.

    Args:
        data: The JSON document, as UTF-8 bytes or as ``str``.

    Example:
        ```python
        reader = JsonTokenReader(b'{"x": 1}')
        while reader.read():
            print(reader.token_type)
        # START_OBJECT, PROPERTY_NAME, NUMBER, END_OBJECT
        ```
    """

    __slots__ = ("_events", "_value", "token_type", "depth")

    def __init__(self, data: bytes | str) -> None:
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._events: t.Iterator[tuple[str, str, t.Any]] = _BACKEND.parse(
            io.BytesIO(data), use_float=True
        )
        self._value: t.Any = None
        self.token_type = JsonTokenType.NONE
        self.depth = 0

    def read(self) -> bool:
        """Advance to the next token.

        Returns:
            False once the input is exhausted, True otherwise.

        Raises:
            JsonReaderError: If the document is not valid JSON.
        """
        try:
            _, event, value = next(self._events)
        except StopIteration:
            self.token_type = JsonTokenType.NONE
            self._value = None
            return False
        except ijson.JSONError as exc:
            raise JsonReaderError(f"Malformed JSON: {exc}") from exc

        if event == "boolean":
            token_type = JsonTokenType.TRUE if value else JsonTokenType.FALSE
        else:
            try:
                token_type = _EVENTS[event]
            except KeyError:
                raise JsonReaderError(f"Unknown JSON event {event!r}") from None

        if token_type in _CONTAINER_START:
            self.depth += 1
        elif token_type in _CONTAINER_END:
            self.depth -= 1

        self.token_type = token_type
        self._value = value
        return True

    def get_string(self) -> str:
        """Return the text of the current property name or string token.

        Raises:
            JsonReaderError: If the current token is not textual.
        """
        if self.token_type not in (JsonTokenType.PROPERTY_NAME, JsonTokenType.STRING):
            raise JsonReaderError(f"Cannot read {self.token_type.name} token as a string")
        return t.cast(str, self._value)

    def get_double(self) -> float:
        """Return the current number token as a float.

        Raises:
            JsonReaderError: If the current token is not a number.
        """
        if self.token_type is not JsonTokenType.NUMBER:
            raise JsonReaderError(f"Cannot read {self.token_type.name} token as a number")
        try:
            return float(self._value)
        except OverflowError:
            raise JsonReaderError("Number does not fit in a float") from None

    def skip(self) -> None:
        """Move past the container that starts at the current token.

        Does nothing unless the reader is positioned on the start of an
        object or array; afterwards it is positioned on the matching end.

        Raises:
            JsonReaderError: If the input ends inside the container.
        """
        if self.token_type not in _CONTAINER_START:
            return
        target = self.depth - 1
        while self.depth > target:
            if not self.read():
                raise JsonReaderError("Unexpected end of JSON inside container")
