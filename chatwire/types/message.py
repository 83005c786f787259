from __future__ import annotations

import logging
import typing as t

import pydantic as pyd
import pydantic_core

from chatwire.json.function_call import DecoderConfig
from chatwire.json.function_call import decode_function_call
from chatwire.json.function_call import encode_function_call
from chatwire.types import BaseModel
from chatwire.types.function_call import FunctionCall

logger = logging.getLogger("chatwire.types.message")

Role: t.TypeAlias = t.Literal["system", "user", "assistant", "function"]
"""Author roles accepted by the chat completions API."""

STRICT_CONTEXT_KEY = "function_call_strict"
"""Validation context key that turns on strict argument decoding."""


def _validate_function_call(value: t.Any, info: pyd.ValidationInfo) -> FunctionCall | None:
    if value is None or isinstance(value, FunctionCall):
        return value

    strict = bool(info.context.get(STRICT_CONTEXT_KEY, False)) if info.context else False
    if isinstance(value, t.Mapping):
        # Re-encode the wire object; dicts keep the key order of the source
        data = pydantic_core.to_json(value)
    elif isinstance(value, (str, bytes)):
        data = value
    else:
        raise ValueError(f"Unsupported function_call value of type {type(value).__name__}")

    return decode_function_call(data, config=DecoderConfig(strict=strict))


FunctionCallField = t.Annotated[
    FunctionCall | None,
    pyd.PlainValidator(_validate_function_call),
    pyd.PlainSerializer(encode_function_call, return_type=t.Any, when_used="unless-none"),
]
"""Message field holding a decoded function call.

Accepts the wire mapping, its raw JSON text, or an already decoded
FunctionCall. Serializing a non-null value always fails.
"""


class Message(BaseModel):
    """A message as part of a conversation.

    Attributes:
        role: The author of the message. Streaming deltas may omit it.
        content: The text of the message. Required for every message except
            assistant messages carrying a function call.
        name: Name of the author. Required for the ``function`` role, where
            it is the name of the function whose result is in ``content``.
            May contain a-z, A-Z, 0-9 and underscores, at most 64 characters.
        function_call: Function the model wants called, with its decoded
            arguments.

    Example:
        ```python
        msg = Message.model_validate_json(
            '{"role": "assistant", "content": null, "function_call": '
            '{"name": "get_weather", "arguments": "{\\"city\\": \\"Paris\\"}"}}'
        )
        msg.function_call.get("city")  # "Paris"

        result = Message(role="function", name="get_weather", content="Sunny")
        result.to_payload()
        # {"role": "function", "content": "Sunny", "name": "get_weather"}
        ```
    """

    role: Role | None = None
    content: str | None = None
    name: str | None = pyd.Field(default=None, max_length=64, pattern=r"^[a-zA-Z0-9_]+$")
    function_call: FunctionCallField = None

    def to_payload(self) -> dict[str, t.Any]:
        """Build the request representation of this message.

        Fields that are None are left out.

        Raises:
            EncodeNotSupportedError: If the message carries a function call.
        """
        if self.function_call is not None:
            logger.debug("Refusing to serialize function call %s", self.function_call.name)
            encode_function_call(self.function_call)
        payload = self.model_dump(exclude_none=True)
        logger.debug("Built %s message payload", self.role)
        return payload
