"""Property tests for the shipped transform pairs.

Critical Invariant:
- reverse(transform(x)) == x for every pair, None included
"""

from datetime import datetime

import pytest
from hypothesis import given
from hypothesis import strategies as st

from entitymap.core.schema.transforms import (
    from_datetime,
    from_int,
    identity,
    nullable,
    to_bool,
    to_datetime,
    to_float,
    to_int,
    to_str,
)


@given(st.none() | st.integers())
def test_int_round_trip(x):
    assert from_int(to_int(x)) == x


@given(st.none() | st.text())
def test_str_round_trip(x):
    assert identity(to_str(x)) == x


@given(st.none() | st.floats(allow_nan=False))
def test_float_round_trip(x):
    assert to_float(x) == x


@given(st.none() | st.datetimes())
def test_datetime_round_trip(x):
    """Datetimes survive formatting to ISO-8601 and parsing back."""
    raw = from_datetime(x)
    assert to_datetime(raw) == x


@given(st.none() | st.booleans())
def test_bool_passes_bools_and_none_through(x):
    assert to_bool(x) is x


@given(st.none() | st.integers() | st.text() | st.lists(st.integers()))
def test_identity_round_trip(x):
    assert identity(identity(x)) == x


def test_to_int_parses_strings():
    assert to_int("42") == 42


def test_to_datetime_accepts_datetime():
    now = datetime(2024, 5, 1, 12, 30)
    assert to_datetime(now) is now


@pytest.mark.parametrize(
    "raw,expected",
    [("true", True), ("Yes", True), ("1", True), ("off", False), ("0", False), ("", False)],
)
def test_to_bool_spellings(raw, expected):
    assert to_bool(raw) is expected


def test_to_bool_rejects_unknown_spelling():
    with pytest.raises(ValueError, match="Not a boolean"):
        to_bool("maybe")


def test_nullable_skips_none():
    calls = []

    def record(value):
        calls.append(value)
        return value * 2

    doubled = nullable(record)

    assert doubled(None) is None
    assert doubled(3) == 6
    assert calls == [3]
