from __future__ import annotations

from typing import Any, overload

from errkit.domain.chain import (
    CodedError,
    FundamentalError,
    MessageError,
    StackError,
)
from errkit.domain.stack import StackTrace
from errkit.domain.traversal import find_stack
from errkit.infrastructure.stack_capture import capture_stack


def _reuse_or_capture(cause: BaseException | None, skip: int) -> StackTrace:
    stack = find_stack(cause)
    if stack is None:
        stack = capture_stack(skip + 1)
    return stack


def _render(message: str, args: tuple[Any, ...], kwargs: dict[str, Any]) -> str:
    if args or kwargs:
        return message.format(*args, **kwargs)
    return message


def new(message: str) -> FundamentalError:
    """Return an error with *message* and the caller's stack."""

    return FundamentalError(message=message, stack=capture_stack(1))


def newf(template: str, *args: Any, **kwargs: Any) -> FundamentalError:
    return FundamentalError(
        message=_render(template, args, kwargs), stack=capture_stack(1)
    )


@overload
def with_stack(cause: None) -> None: ...
@overload
def with_stack(cause: BaseException) -> StackError: ...


def with_stack(cause: BaseException | None) -> StackError | None:
    """Annotate *cause* with the caller's stack unless its chain has one."""

    if cause is None:
        return None
    return StackError(cause=cause, stack=_reuse_or_capture(cause, 1))


@overload
def with_message(cause: None, message: str) -> None: ...
@overload
def with_message(cause: BaseException, message: str) -> MessageError: ...


def with_message(cause: BaseException | None, message: str) -> MessageError | None:
    """Add *message* to *cause* without recording a new stack."""

    if cause is None:
        return None
    return MessageError(cause=cause, message=message, stack=find_stack(cause))


@overload
def with_messagef(cause: None, template: str, *args: Any, **kwargs: Any) -> None: ...
@overload
def with_messagef(
    cause: BaseException, template: str, *args: Any, **kwargs: Any
) -> MessageError: ...


def with_messagef(
    cause: BaseException | None, template: str, *args: Any, **kwargs: Any
) -> MessageError | None:
    if cause is None:
        return None
    return MessageError(
        cause=cause,
        message=_render(template, args, kwargs),
        stack=find_stack(cause),
    )


@overload
def wrap(cause: None, message: str) -> None: ...
@overload
def wrap(cause: BaseException, message: str) -> MessageError: ...


def wrap(cause: BaseException | None, message: str) -> MessageError | None:
    """Add *message* to *cause* and make sure the chain has a stack.

    Wrapping ``None`` returns ``None``, so return values can be wrapped
    without checking them first.
    """

    if cause is None:
        return None
    return MessageError(
        cause=cause, message=message, stack=_reuse_or_capture(cause, 1)
    )


@overload
def wrapf(cause: None, template: str, *args: Any, **kwargs: Any) -> None: ...
@overload
def wrapf(
    cause: BaseException, template: str, *args: Any, **kwargs: Any
) -> MessageError: ...


def wrapf(
    cause: BaseException | None, template: str, *args: Any, **kwargs: Any
) -> MessageError | None:
    if cause is None:
        return None
    return MessageError(
        cause=cause,
        message=_render(template, args, kwargs),
        stack=_reuse_or_capture(cause, 1),
    )


def with_code(code: int, message: str, *args: Any, **kwargs: Any) -> CodedError:
    """Return a new coded error; *message* is formatted only when given arguments."""

    return CodedError(
        message=_render(message, args, kwargs), code=code, stack=capture_stack(1)
    )


@overload
def wrap_c(
    cause: None, code: int, message: str, *args: Any, **kwargs: Any
) -> None: ...
@overload
def wrap_c(
    cause: BaseException, code: int, message: str, *args: Any, **kwargs: Any
) -> CodedError: ...


def wrap_c(
    cause: BaseException | None, code: int, message: str, *args: Any, **kwargs: Any
) -> CodedError | None:
    """Wrap *cause* with *code*; the outer code wins for :func:`code` lookups."""

    if cause is None:
        return None
    return CodedError(
        message=_render(message, args, kwargs),
        code=code,
        cause=cause,
        stack=_reuse_or_capture(cause, 1),
    )
