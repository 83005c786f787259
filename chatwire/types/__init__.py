from __future__ import annotations

import typing as t

import pydantic as pyd


class BaseModel(pyd.BaseModel):
    """Base model shared by the chat completion envelope records.

    Records are validated from response bodies and are immutable afterwards.
    Unknown fields are ignored rather than rejected, since the API adds
    response fields over time.

    Attributes:
        model_config: Configuration dictionary for the model.
    """
    model_config: t.ClassVar[pyd.ConfigDict] = pyd.ConfigDict(
        validate_assignment=True,  # Validate on assignment
        validate_default=False,  # Do not validate default values
        extra="ignore",  # Tolerate newer API fields
        arbitrary_types_allowed=True,  # Allow arbitrary types
        populate_by_name=True,  # Allow population by field name
        frozen=True,  # Make the model immutable
    )
