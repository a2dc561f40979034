import pytest

from planmon.format import elapsed_time


def _parse(text):
    hours, minutes, secs = (int(part) for part in text.split(":"))
    return hours, minutes, secs


def test_zero_seconds():
    assert elapsed_time(0) == "0:0:0"


def test_one_of_each_unit():
    assert elapsed_time(3661) == "1:1:1"


def test_fields_are_not_zero_padded():
    assert elapsed_time(59).split(":")[-1] == "59"


@pytest.mark.parametrize("seconds", [0, 1, 59, 60, 61, 3599, 3600, 86399, 86400, 360000, 1234567])
def test_round_trip_and_ranges(seconds):
    hours, minutes, secs = _parse(elapsed_time(seconds))
    assert hours * 3600 + minutes * 60 + secs == seconds
    assert 0 <= minutes < 60
    assert 0 <= secs < 60


def test_hours_are_not_wrapped():
    hours, _, _ = _parse(elapsed_time(100 * 3600))
    assert hours == 100


@pytest.mark.parametrize("seconds", [-1, -61, -3661])
def test_negative_values_round_trip(seconds):
    hours, minutes, secs = _parse(elapsed_time(seconds))
    assert hours * 3600 + minutes * 60 + secs == seconds
    assert secs <= 0 and minutes <= 0