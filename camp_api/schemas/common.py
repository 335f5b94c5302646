"""Shared schema base classes."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model whose wire format uses camelCase keys.

    Unknown keys in request bodies are dropped, not rejected.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        extra="ignore",
    )


class OkResponse(CamelModel):
    """Bare acknowledgement."""
    ok: bool = True
