from __future__ import annotations

from collections.abc import Iterable
from typing import Any, TypeVar

from .traversal import as_, is_

E = TypeVar("E", bound=BaseException)


class Aggregate(Exception):
    """Several errors reported as one value."""

    __slots__ = ("_errors",)

    def __init__(self, errors: Iterable[BaseException]) -> None:
        self._errors = tuple(errors)
        super().__init__(*self._errors)

    @property
    def errors(self) -> tuple[BaseException, ...]:
        return self._errors

    def __reduce__(self) -> tuple[Any, ...]:
        return type(self), (self._errors,)

    def __str__(self) -> str:
        if len(self._errors) == 1:
            return str(self._errors[0])
        messages = list(dict.fromkeys(str(e) for e in self._errors))
        if len(messages) == 1:
            return messages[0]
        return "[" + ", ".join(messages) + "]"

    def __format__(self, spec: str) -> str:
        from errkit.infrastructure.formatting import format_error

        return format_error(self, spec)

    def is_(self, target: BaseException) -> bool:
        return any(is_(e, target) for e in self._errors)

    def as_(self, error_type: type[E]) -> E | None:
        for e in self._errors:
            found = as_(e, error_type)
            if found is not None:
                return found
        return None
