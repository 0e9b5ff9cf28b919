import pickle

import pytest

from errkit import (
    Aggregate,
    FundamentalError,
    aggregate_from_message_counts,
    as_,
    filter_out,
    flatten,
    is_,
    new,
    new_aggregate,
    reduce,
    to_json,
    wrap,
)


def test_new_aggregate_drops_none() -> None:
    a = ValueError("a")
    agg = new_aggregate([None, a, None])
    assert isinstance(agg, Aggregate)
    assert agg.errors == (a,)


@pytest.mark.parametrize("errors", [[], [None, None]])
def test_new_aggregate_empty_is_none(errors: list[BaseException | None]) -> None:
    assert new_aggregate(errors) is None


@pytest.mark.parametrize(
    "errors, expected",
    [
        ([ValueError("only")], "only"),
        ([ValueError("same"), TypeError("same")], "same"),
        ([ValueError("a"), ValueError("b"), ValueError("a")], "[a, b]"),
    ],
)
def test_aggregate_message(errors: list[BaseException], expected: str) -> None:
    agg = new_aggregate(errors)
    assert agg is not None
    assert str(agg) == expected
    assert f"{agg}" == expected


def test_aggregate_is_visits_members() -> None:
    target = new("deep")
    agg = new_aggregate([ValueError("a"), new_aggregate([wrap(target, "ctx")])])
    assert is_(agg, target)
    assert is_(wrap(agg, "outer"), target)
    assert not is_(agg, new("deep"))


def test_aggregate_as_finds_member() -> None:
    target = new("deep")
    agg = new_aggregate([ValueError("a"), wrap(target, "ctx")])
    assert as_(wrap(agg, "outer"), FundamentalError) is target
    assert as_(agg, KeyError) is None


def test_flatten_inlines_nested_aggregates() -> None:
    a, b, c = ValueError("a"), ValueError("b"), ValueError("c")
    agg = new_aggregate([a, new_aggregate([b, new_aggregate([c])])])
    flat = flatten(agg)
    assert flat is not None
    assert flat.errors == (a, b, c)
    assert flatten(None) is None


def test_reduce() -> None:
    a = ValueError("a")
    assert reduce(new_aggregate([a])) is a
    assert reduce(Aggregate(())) is None
    pair = new_aggregate([a, ValueError("b")])
    assert reduce(pair) is pair
    assert reduce(a) is a
    assert reduce(None) is None


def test_filter_out() -> None:
    a, b, c = ValueError("a"), KeyError("b"), ValueError("c")
    agg = new_aggregate([a, new_aggregate([b, c])])

    def is_key_error(err: BaseException) -> bool:
        return isinstance(err, KeyError)

    filtered = filter_out(agg, is_key_error)
    assert filtered is not None
    assert str(filtered) == "[a, c]"
    assert filter_out(agg, lambda e: True) is None
    assert filter_out(b, is_key_error) is None
    assert filter_out(a, is_key_error) is a
    assert filter_out(None, is_key_error) is None


def test_aggregate_from_message_counts() -> None:
    agg = aggregate_from_message_counts({"timeout": 3, "refused": 1})
    assert agg is not None
    assert [str(e) for e in agg.errors] == ["refused", "timeout (repeated 3 times)"]
    assert aggregate_from_message_counts({}) is None


def test_aggregate_renders_as_single_json_record() -> None:
    agg = new_aggregate([ValueError("a"), ValueError("b")])
    assert to_json(wrap(agg, "batch failed")).endswith(',{"message":"[a, b]"}]')


def test_aggregate_survives_pickling() -> None:
    agg = new_aggregate([ValueError("a"), new("b")])
    restored = pickle.loads(pickle.dumps(agg))
    assert type(restored) is Aggregate
    assert str(restored) == "[a, b]"
    assert isinstance(restored.errors[1], FundamentalError)
    assert restored.errors[1].stack is not None
