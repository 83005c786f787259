from __future__ import annotations

import logging
import typing as t

from chatwire.types import BaseModel
from chatwire.types.function_call import FunctionCall
from chatwire.types.message import STRICT_CONTEXT_KEY
from chatwire.types.message import Message
from chatwire.types.usage import Usage

logger = logging.getLogger("chatwire.types.completion")

FinishReason: t.TypeAlias = t.Literal["stop", "length", "function_call", "content_filter"]
"""Known values of ``Choice.finish_reason``."""


class Choice(BaseModel):
    """One candidate response in a chat completion.

    Attributes:
        message: The message of a non-streaming response.
        delta: The message fragment of a streaming response.
        finish_reason: Why generation stopped. ``stop`` when the API returned
            the complete output, ``length`` when it hit the token limit,
            ``function_call`` when the model decided to call a function,
            ``content_filter`` when content was omitted by the filters, and
            None while the response is still in progress. Kept as a plain
            string so that newer reasons still validate.
        index: Position of this choice in the list of choices.
    """

    message: Message | None = None
    delta: Message | None = None
    finish_reason: FinishReason | str | None = None
    index: int = 0


class ChatCompletion(BaseModel):
    """A model's response for a given chat conversation.

    Attributes:
        id: The ID of this completion.
        object: Object type, ``chat.completion`` or ``chat.completion.chunk``.
        created: Unix time when this completion was created.
        model: The model used to generate this completion.
        usage: Token usage, usually absent from streaming chunks.
        choices: Candidate responses.

    Example:
        ```python
        completion = decode_chat_completion(raw_body)
        if completion.function_call is not None:
            handler = registry[completion.function_call.name]
            handler(**completion.function_call.to_kwargs())
        else:
            print(completion.message.content)
        ```
    """

    id: str | None = None
    object: str | None = None
    created: int = 0
    model: str | None = None
    usage: Usage | None = None
    choices: tuple[Choice, ...] = ()

    @property
    def message(self) -> Message | None:
        """Message of the first choice, falling back to its delta."""
        if not self.choices:
            return None
        choice = self.choices[0]
        return choice.message if choice.message is not None else choice.delta

    @property
    def function_call(self) -> FunctionCall | None:
        """Function call requested in the first choice, if any."""
        message = self.message
        return message.function_call if message is not None else None


def decode_chat_completion(data: str | bytes, *, strict: bool = False) -> ChatCompletion:
    """Parse a raw chat completion response body.

    Args:
        data: JSON text of the response.
        strict: Reject function call arguments that are neither numbers nor
            strings instead of dropping them.

    Returns:
        The validated completion.

    Raises:
        pydantic.ValidationError: If the body, or a function call in it, is
            malformed.
    """
    completion = ChatCompletion.model_validate_json(data, context={STRICT_CONTEXT_KEY: strict})
    logger.debug(
        "Decoded completion %s with %s choices", completion.id, len(completion.choices)
    )
    return completion
