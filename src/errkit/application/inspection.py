from __future__ import annotations

from errkit.domain.models import UNKNOWN_CODER, Coder
from errkit.domain.ports import ErrorLink
from errkit.domain.traversal import (
    as_,
    find_stack,
    is_,
    iter_chain,
    root_cause,
    unwrap,
)

from .registry import lookup

__all__ = [
    "as_",
    "code",
    "find_stack",
    "is_",
    "is_code",
    "iter_chain",
    "parse_coder",
    "root_cause",
    "unwrap",
]


def code(err: BaseException | None) -> int:
    """Return the outermost error code in the chain.

    Falls back to the unknown coder's code when no link carries one.
    """

    for link in iter_chain(err):
        if isinstance(link, ErrorLink) and link.code:
            return link.code
    return UNKNOWN_CODER.code


def parse_coder(err: BaseException | None) -> Coder:
    if err is None:
        return UNKNOWN_CODER
    return lookup(code(err))


def is_code(err: BaseException | None, value: int) -> bool:
    """Report whether any link of the chain carries *value* as its code."""

    return any(
        isinstance(link, ErrorLink) and link.code == value for link in iter_chain(err)
    )
