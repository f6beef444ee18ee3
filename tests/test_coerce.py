import math

import numpy as np
import pandas as pd
import pytest

from speedgraph.coerce import to_number_loose


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("1,234", 1234),
        ("60 km/h", 60),
        ("12 MPH", 12),
        ("3.5 m/s", 3.5),
        ("9ms-1", 9),
        ("9 ms^-1", 9),
        ("  88 kph ", 88),
        ("1,000,000", 1_000_000),
        ("-4.5", -4.5),
        ("1e3", 1000),
        (".5", 0.5),
    ],
)
def test_loose_strings(raw, expected):
    assert to_number_loose(raw) == expected


@pytest.mark.parametrize("raw", ["", "   ", "abc", "fast", "1_000", "--1", "1.2.3", "inf", "nan", "1e999", "km/h"])
def test_unparseable_strings_are_none(raw):
    assert to_number_loose(raw) is None


def test_absent_and_missing_values():
    assert to_number_loose(None) is None
    assert to_number_loose(pd.NA) is None
    assert to_number_loose(float("nan")) is None


def test_numbers_accepted_only_when_finite():
    assert to_number_loose(42) == 42
    assert to_number_loose(2.5) == 2.5
    assert to_number_loose(np.int64(7)) == 7
    assert to_number_loose(np.float64(1.25)) == 1.25
    assert to_number_loose(math.inf) is None
    assert to_number_loose(np.float64("nan")) is None


def test_booleans_are_not_numbers():
    assert to_number_loose(True) is None
    assert to_number_loose(False) is None


def test_never_raises_on_odd_objects():
    assert to_number_loose(object()) is None
    assert to_number_loose([1, 2]) is None
