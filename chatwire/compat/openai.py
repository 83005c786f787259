from __future__ import annotations

import logging
import typing as t

import openai.types.chat as chat_t

from chatwire.types.completion import ChatCompletion
from chatwire.types.message import STRICT_CONTEXT_KEY
from chatwire.types.message import Message

logger = logging.getLogger("chatwire.compat.openai")


def _restore_wire_order(choice: dict[str, t.Any]) -> None:
    # The SDK declares `arguments` before `name`, so dumps come out reversed
    message = choice.get("message") or {}
    call = message.get("function_call")
    if isinstance(call, dict):
        message["function_call"] = {"name": call.get("name"), "arguments": call.get("arguments")}


def from_openai(completion: chat_t.ChatCompletion, *, strict: bool = False) -> ChatCompletion:
    """Convert an OpenAI SDK completion into a ChatCompletion.

    The SDK keeps ``function_call.arguments`` as a raw JSON string; it is
    decoded into typed arguments on the way.

    Args:
        completion: Response returned by ``client.chat.completions.create``.
        strict: Reject function call arguments that are neither numbers nor
            strings instead of dropping them.

    Returns:
        The equivalent ChatCompletion.

    Raises:
        pydantic.ValidationError: If a function call in the response is
            malformed.
    """
    data = completion.model_dump(mode="json", exclude_none=True)
    for choice in data.get("choices", ()):
        _restore_wire_order(choice)
    logger.debug("Converting OpenAI completion %s", completion.id)
    return ChatCompletion.model_validate(data, context={STRICT_CONTEXT_KEY: strict})


def to_openai_messages(
    messages: t.Iterable[Message],
) -> list[chat_t.ChatCompletionMessageParam]:
    """Build the ``messages`` parameter of an OpenAI chat completion request.

    Args:
        messages: Conversation history.

    Returns:
        Message params in the same order.

    Raises:
        EncodeNotSupportedError: If a message carries a function call.
    """
    params = []  # type: list[chat_t.ChatCompletionMessageParam]
    for i, msg in enumerate(messages):
        params.append(t.cast(chat_t.ChatCompletionMessageParam, msg.to_payload()))
        logger.debug("Built %s message %s", msg.role, i)
    return params
