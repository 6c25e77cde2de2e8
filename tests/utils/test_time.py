import pytest

from pressure_management_core.utils.time import clock_to_seconds, format_clock_time, time_of_day


@pytest.mark.parametrize(
    "value, expected",
    [
        (3600, 3600),
        (5400.0, 5400),
        ("7200", 7200),
        ("01:00", 3600),
        ("5:30:15", 19815),
        ("1 PM", 46800),
        ("00:00", 0),
    ],
)
def test_clock_to_seconds(value, expected):
    assert clock_to_seconds(value) == expected


@pytest.mark.parametrize(
    "seconds, expected",
    [(0, "0:00:00"), (59, "0:00:59"), (3725, "1:02:05"), (90000, "25:00:00")],
)
def test_format_clock_time(seconds, expected):
    assert format_clock_time(seconds) == expected


@pytest.mark.parametrize("seconds, expected", [(0, 0), (86399, 86399), (86400, 0), (90000, 3600)])
def test_time_of_day(seconds, expected):
    assert time_of_day(seconds) == expected
