from __future__ import annotations

from chatwire.types import BaseModel


class Usage(BaseModel):
    """Token usage statistics for a chat completion.

    Attributes:
        prompt_tokens: Number of tokens in the input prompt.
        completion_tokens: Number of tokens generated in the completion.
        total_tokens: Sum of prompt_tokens and completion_tokens.
    """

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0
