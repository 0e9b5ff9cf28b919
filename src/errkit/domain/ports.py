from __future__ import annotations

from typing import Protocol, runtime_checkable

from .stack import StackTrace


@runtime_checkable
class ErrorLink(Protocol):
    """One link of an errkit chain as seen by inspection and rendering."""

    @property
    def message(self) -> str:
        """Text added by this link, empty when it only carries a stack."""
        ...  # pragma: no cover

    @property
    def cause(self) -> BaseException | None: ...  # pragma: no cover

    @property
    def stack(self) -> StackTrace | None: ...  # pragma: no cover

    @property
    def code(self) -> int:
        """Error code attached here; ``0`` means none."""
        ...  # pragma: no cover

    @property
    def owns_stack(self) -> bool:
        """``True`` when this link captured its stack itself."""
        ...  # pragma: no cover
