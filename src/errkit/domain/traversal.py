from __future__ import annotations

from collections.abc import Iterator
from typing import TypeVar

from .ports import ErrorLink
from .stack import StackTrace

E = TypeVar("E", bound=BaseException)


def unwrap(err: BaseException | None) -> BaseException | None:
    """Return the direct cause of *err*, or ``None`` at the chain root.

    errkit links answer with the cause they wrapped, even if a later
    ``raise ... from other`` replaced their ``__cause__``; any other exception
    answers with ``__cause__``.
    """

    if err is None:
        return None
    if isinstance(err, ErrorLink):
        return err.cause
    return err.__cause__


def iter_chain(err: BaseException | None) -> Iterator[BaseException]:
    """Yield every link of the chain from outermost to innermost."""

    seen: set[int] = set()
    while err is not None and id(err) not in seen:
        seen.add(id(err))
        yield err
        err = unwrap(err)


def root_cause(err: BaseException | None) -> BaseException | None:
    last = None
    for last in iter_chain(err):
        pass
    return last


def find_stack(err: BaseException | None) -> StackTrace | None:
    """Return the nearest stack recorded in the chain of *err*."""

    for link in iter_chain(err):
        if isinstance(link, ErrorLink) and link.stack is not None:
            return link.stack
    return None


def is_(err: BaseException | None, target: BaseException | None) -> bool:
    """Report whether any link of the chain matches *target*.

    A link matches when it is (or equals) *target*, or when it provides an
    ``is_(target)`` method that returns ``True``.
    """

    if err is None or target is None:
        return err is target
    for link in iter_chain(err):
        if link is target or link == target:
            return True
        matcher = getattr(link, "is_", None)
        if callable(matcher) and matcher(target):
            return True
    return False


def as_(err: BaseException | None, error_type: type[E]) -> E | None:
    """Return the first link of the chain that is an instance of *error_type*."""

    for link in iter_chain(err):
        if isinstance(link, error_type):
            return link
        finder = getattr(link, "as_", None)
        if callable(finder):
            found = finder(error_type)
            if found is not None:
                return found
    return None
