from __future__ import annotations

from typing import Any

from .stack import StackTrace
from .traversal import find_stack


def _rebuild(
    cls: type[ChainError],
    message: str,
    cause: BaseException | None,
    stack: StackTrace | None,
    code: int,
) -> ChainError:
    err = cls.__new__(cls)
    ChainError.__init__(err, message, cause=cause, stack=stack, code=code)
    return err


class ChainError(Exception):
    """Error carrying its own message, an optional cause, stack and code.

    Instances are immutable: the public attributes are read-only and wrapping
    never alters the cause, it only adds a new outer link. The cause is also
    stored as ``__cause__`` so tracebacks show the whole chain.

    ``raise err from other`` replaces ``__cause__`` for the traceback only;
    ``cause`` and :func:`~errkit.unwrap` keep answering with the wrapped error.
    """

    __slots__ = ("_message", "_cause", "_stack", "_code")

    def __init__(
        self,
        message: str = "",
        *,
        cause: BaseException | None = None,
        stack: StackTrace | None = None,
        code: int = 0,
    ) -> None:
        super().__init__(message)
        self._message = message
        self._cause = cause
        self._stack = stack
        self._code = code
        if cause is not None:
            self.__cause__ = cause

    @property
    def message(self) -> str:
        return self._message

    @property
    def cause(self) -> BaseException | None:
        return self._cause

    @property
    def stack(self) -> StackTrace | None:
        return self._stack

    @property
    def code(self) -> int:
        return self._code

    @property
    def owns_stack(self) -> bool:
        if self._stack is None:
            return False
        return self._stack is not find_stack(self._cause)

    def __reduce__(self) -> tuple[Any, ...]:
        # subclasses differ in their constructors, rebuild through the base one
        return _rebuild, (
            type(self),
            self._message,
            self._cause,
            self._stack,
            self._code,
        )

    def __str__(self) -> str:
        if self._message:
            return self._message
        if self._cause is not None:
            return str(self._cause)
        return ""

    def __repr__(self) -> str:
        if self._code:
            return f"{type(self).__name__}({self._message!r}, code={self._code})"
        return f"{type(self).__name__}({str(self)!r})"

    def __format__(self, spec: str) -> str:
        from errkit.infrastructure.formatting import format_error

        return format_error(self, spec)


class FundamentalError(ChainError):
    """Chain root created by ``new`` and ``newf``."""

    __slots__ = ()

    def __init__(self, message: str, stack: StackTrace | None = None) -> None:
        super().__init__(message, stack=stack)


class StackError(ChainError):
    """Annotates *cause* with a stack without adding text."""

    __slots__ = ()

    def __init__(self, cause: BaseException, stack: StackTrace | None = None) -> None:
        super().__init__(cause=cause, stack=stack)


class MessageError(ChainError):
    __slots__ = ()

    def __init__(
        self, cause: BaseException, message: str, stack: StackTrace | None = None
    ) -> None:
        super().__init__(message, cause=cause, stack=stack)


class CodedError(ChainError):
    """Attaches an error code; *cause* is ``None`` for a chain root."""

    __slots__ = ()

    def __init__(
        self,
        message: str,
        code: int,
        cause: BaseException | None = None,
        stack: StackTrace | None = None,
    ) -> None:
        super().__init__(message, cause=cause, stack=stack, code=code)
