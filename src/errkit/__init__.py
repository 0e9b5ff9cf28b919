"""Error values with stack traces, error codes and cause chains.

Create errors with :func:`new` or :func:`with_code`, add context while they
travel up the call stack with :func:`wrap`, :func:`with_message` or
:func:`wrap_c`, and inspect or render them at the boundary::

    err = errkit.wrap_c(exc, ErrInvalidJSON, "could not decode configuration")
    errkit.code(err)        # ErrInvalidJSON
    f"{err:+v}"             # messages and stack frames
    errkit.to_json(err)     # one record per chain link

Logging goes through loguru and is disabled for this package by default; call
``logger.enable("errkit")`` to see it.
"""

from __future__ import annotations

from loguru import logger

from errkit.application.aggregation import (
    aggregate_from_message_counts,
    filter_out,
    flatten,
    new_aggregate,
    reduce,
)
from errkit.application.inspection import (
    as_,
    code,
    is_,
    is_code,
    iter_chain,
    parse_coder,
    root_cause,
    unwrap,
)
from errkit.application.registry import (
    CoderRegistry,
    default_registry,
    is_registered,
    lookup,
    register,
)
from errkit.application.wrapping import (
    new,
    newf,
    with_code,
    with_message,
    with_messagef,
    with_stack,
    wrap,
    wrap_c,
    wrapf,
)
from errkit.config import Settings, get_settings
from errkit.domain.aggregate import Aggregate
from errkit.domain.chain import (
    ChainError,
    CodedError,
    FundamentalError,
    MessageError,
    StackError,
)
from errkit.domain.models import UNKNOWN_CODER, Coder
from errkit.domain.stack import Frame, StackTrace
from errkit.errors import (
    CoderRegistrationError,
    DuplicateCoderError,
    ErrkitError,
    InvalidCoderError,
    ReservedCoderError,
)
from errkit.infrastructure.error_utils import log_and_wrap, wrap_exceptions
from errkit.infrastructure.formatting import format_error, to_json, to_records
from errkit.infrastructure.stack_capture import capture_stack

logger.disable("errkit")

__all__ = [
    "Aggregate",
    "ChainError",
    "Coder",
    "CoderRegistrationError",
    "CoderRegistry",
    "CodedError",
    "DuplicateCoderError",
    "ErrkitError",
    "Frame",
    "FundamentalError",
    "InvalidCoderError",
    "MessageError",
    "ReservedCoderError",
    "Settings",
    "StackError",
    "StackTrace",
    "UNKNOWN_CODER",
    "aggregate_from_message_counts",
    "as_",
    "capture_stack",
    "code",
    "default_registry",
    "filter_out",
    "flatten",
    "format_error",
    "get_settings",
    "is_",
    "is_code",
    "is_registered",
    "iter_chain",
    "log_and_wrap",
    "lookup",
    "new",
    "new_aggregate",
    "newf",
    "parse_coder",
    "reduce",
    "register",
    "root_cause",
    "to_json",
    "to_records",
    "unwrap",
    "with_code",
    "with_message",
    "with_messagef",
    "with_stack",
    "wrap",
    "wrap_c",
    "wrap_exceptions",
    "wrapf",
]
