from __future__ import annotations

import enum
import typing as t


class ArgumentType(str, enum.Enum):
    """Kind of value carried by an ArgumentDefinition."""

    NUMBER = "number"
    """A double precision number."""

    STRING = "string"
    """A string."""


class ArgumentDefinition(t.NamedTuple):
    """Single argument of a model-issued function call.

    Attributes:
        name: The JSON key of the argument.
        type: Discriminator for ``value``.
        value: ``float`` for ``ArgumentType.NUMBER``, ``str`` for
            ``ArgumentType.STRING``.
    """

    name: str
    type: ArgumentType
    value: float | str


class FunctionCall(t.NamedTuple):
    """Request from the model to invoke a named function.

    Built once by ``chatwire.json.function_call.FunctionCallDecoder`` and
    never modified afterwards. Arguments keep the order in which their keys
    appeared in the source payload, so consumers may format them
    positionally.

    Attributes:
        name: The name of the function to call.
        arguments: Decoded arguments in encounter order.

    Example:
        ```python
        call = decode_function_call(
            '{"name": "get_weather", "arguments": "{\\"city\\": \\"Paris\\"}"}'
        )
        call.name  # "get_weather"
        call.get("city")  # "Paris"
        call.to_kwargs()  # {"city": "Paris"}
        ```
    """

    name: str
    arguments: tuple[ArgumentDefinition, ...] = ()

    def get(self, name: str, default: float | str | None = None) -> float | str | None:
        """Return the value of the first argument called ``name``."""
        for arg in self.arguments:
            if arg.name == name:
                return arg.value
        return default

    def to_kwargs(self) -> dict[str, float | str]:
        """Map argument names to values, preserving argument order.

        A key repeated in the payload keeps its last value but the position
        of its first occurrence.
        """
        return {arg.name: arg.value for arg in self.arguments}
