from __future__ import annotations


class ChatWireError(Exception):
    """Base exception for chatwire errors.

    Covers failures to tokenize JSON, to decode a function call payload, and
    attempts to write a function call back to the API.
    """

    def __init__(self, msg: str, /):
        super().__init__(msg)
        self.message = msg

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class JsonReaderError(ChatWireError, ValueError):
    """Exception raised when the underlying JSON cannot be tokenized or a
    token is read as the wrong kind."""


class FunctionCallDecodeError(ChatWireError, ValueError):
    """Exception raised when a function call payload does not have the
    expected structure."""


class UnsupportedArgumentKindError(FunctionCallDecodeError):
    """Exception raised in strict mode for argument values that are neither
    numbers nor strings."""


class EncodeNotSupportedError(ChatWireError, NotImplementedError):
    """Exception raised when serializing a function call back to JSON."""
