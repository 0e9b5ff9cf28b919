from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping

from errkit.domain.aggregate import Aggregate

from .wrapping import new

Matcher = Callable[[BaseException], bool]


def new_aggregate(errors: Iterable[BaseException | None]) -> Aggregate | None:
    """Collect *errors* into an :class:`Aggregate`, skipping ``None`` entries.

    Returns ``None`` when nothing is left.
    """

    kept = tuple(e for e in errors if e is not None)
    if not kept:
        return None
    return Aggregate(kept)


def flatten(agg: Aggregate | None) -> Aggregate | None:
    """Inline nested aggregates into a single level."""

    if agg is None:
        return None
    return new_aggregate(_flatten(agg.errors))


def _flatten(errors: Iterable[BaseException]) -> list[BaseException]:
    out: list[BaseException] = []
    for e in errors:
        if isinstance(e, Aggregate):
            out.extend(_flatten(e.errors))
        else:
            out.append(e)
    return out


def reduce(err: BaseException | None) -> BaseException | None:
    """Unpack an aggregate holding a single error."""

    if isinstance(err, Aggregate):
        if not err.errors:
            return None
        if len(err.errors) == 1:
            return err.errors[0]
    return err


def filter_out(err: BaseException | None, *matchers: Matcher) -> BaseException | None:
    """Drop errors matched by any of *matchers*, recursing into aggregates."""

    if err is None:
        return None
    if isinstance(err, Aggregate):
        return new_aggregate(_filter(err.errors, matchers))
    if _matches(err, matchers):
        return None
    return err


def _filter(
    errors: Iterable[BaseException], matchers: tuple[Matcher, ...]
) -> list[BaseException]:
    out: list[BaseException] = []
    for e in errors:
        if isinstance(e, Aggregate):
            nested = new_aggregate(_filter(e.errors, matchers))
            if nested is not None:
                out.append(nested)
        elif not _matches(e, matchers):
            out.append(e)
    return out


def _matches(err: BaseException, matchers: tuple[Matcher, ...]) -> bool:
    return any(m(err) for m in matchers)


def aggregate_from_message_counts(counts: Mapping[str, int]) -> Aggregate | None:
    """Build one error per message, noting how often it was repeated."""

    errors: list[BaseException] = []
    for message in sorted(counts):
        times = counts[message]
        if times > 1:
            message = f"{message} (repeated {times} times)"
        errors.append(new(message))
    return new_aggregate(errors)
