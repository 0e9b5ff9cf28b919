from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictInt

from .stack import StackTrace


class ConfiguredBaseModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class Coder(ConfiguredBaseModel):
    """Metadata registered for an integer error code."""

    code: StrictInt
    http_status: StrictInt = Field(default=500, ge=100, le=599)
    message: str = Field(min_length=1)
    reference: str = ""

    def __str__(self) -> str:
        return self.message


UNKNOWN_CODER = Coder(
    code=1,
    http_status=500,
    message="An internal server error occurred",
)


class LinkRecord(ConfiguredBaseModel):
    """Machine-readable view of one link of an error chain."""

    message: str
    code: int | None = None
    stack: StackTrace | None = None
