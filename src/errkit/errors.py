from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


@dataclass(slots=True, eq=False)
class ErrkitError(Exception):
    """Base error for failures raised by errkit itself.

    Attributes:
        message: Human-readable message describing the error.
        code: Optional machine-readable code for monitoring/alerts.
        context: Optional structured context for diagnostics.
    """

    message: str
    code: str | None = None
    context: Mapping[str, Any] | None = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.message


@dataclass(slots=True, eq=False, kw_only=True)
class CoderRegistrationError(ErrkitError):
    """Base exception for rejected coder registrations."""


@dataclass(slots=True, eq=False, kw_only=True)
class DuplicateCoderError(CoderRegistrationError):
    code_value: int
    message: str = field(init=False)
    code: str = field(init=False, default="REGISTRY_CODE_DUPLICATE")

    def __post_init__(self) -> None:
        self.message = f"Code {self.code_value} is already registered"
        self.context = {"code": self.code_value}


@dataclass(slots=True, eq=False, kw_only=True)
class ReservedCoderError(CoderRegistrationError):
    code_value: int
    message: str = field(init=False)
    code: str = field(init=False, default="REGISTRY_CODE_RESERVED")

    def __post_init__(self) -> None:
        self.message = f"Code {self.code_value} is reserved and can't be registered"
        self.context = {"code": self.code_value}


@dataclass(slots=True, eq=False, kw_only=True)
class InvalidCoderError(CoderRegistrationError):
    reason: str
    message: str = field(init=False)
    code: str = field(init=False, default="REGISTRY_CODER_INVALID")

    def __post_init__(self) -> None:
        self.message = f"Invalid coder: {self.reason}"
        self.context = {"reason": self.reason}
