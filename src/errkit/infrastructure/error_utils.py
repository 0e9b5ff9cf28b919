from __future__ import annotations

import asyncio
import functools
import inspect
import traceback
from collections.abc import Callable, Mapping
from typing import Any, NoReturn, ParamSpec, TypeVar

from loguru import logger

from errkit.application.wrapping import wrap_c
from errkit.domain.chain import CodedError

P = ParamSpec("P")
R = TypeVar("R")


def _format_tail(exc: BaseException, *, limit: int = 6) -> str:
    tb = traceback.format_exception(type(exc), exc, exc.__traceback__)
    return "".join(tb[-limit:])


def _log_coded(
    log: Any,
    exc: BaseException,
    code: int,
    message: str,
    context: Mapping[str, Any] | None = None,
) -> CodedError:
    """Log *exc* under *code* and return it wrapped as a coded error.

    The record carries ``error_code`` and ``error_message`` in ``extra`` next
    to any *context* so sinks can route on them.
    """

    extra = {**(context or {}), "error_code": code, "error_message": message}
    log.opt(exception=exc).bind(**extra).error(
        "{} (code {})\n{}", message, code, _format_tail(exc)
    )
    return wrap_c(exc, code, message)


def log_and_wrap(
    exc: BaseException,
    code: int,
    message: str,
    log=logger,  # loguru logger-like
    context: dict[str, Any] | None = None,
) -> NoReturn:
    """Log a short traceback of *exc* and raise it wrapped with *code*."""

    raise _log_coded(log, exc, code, message, context) from exc


def wrap_exceptions(code: int, message: str) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Decorator turning any ``Exception`` from the call into a coded chain error.

    ``asyncio.CancelledError`` is re-raised untouched.
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        context = {"function": func.__qualname__}

        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: P.args, **kwargs: P.kwargs):  # type: ignore[override]
                try:
                    return await func(*args, **kwargs)
                except asyncio.CancelledError:
                    raise
                except Exception as exc:
                    raise _log_coded(logger, exc, code, message, context) from exc

            return async_wrapper  # type: ignore[return-value]

        @functools.wraps(func)
        def sync_wrapper(*args: P.args, **kwargs: P.kwargs):  # type: ignore[override]
            try:
                return func(*args, **kwargs)
            except Exception as exc:
                raise _log_coded(logger, exc, code, message, context) from exc

        return sync_wrapper  # type: ignore[return-value]

    return decorator
