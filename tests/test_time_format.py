"""
Unit tests for hour label formatting.
"""
import pytest

from utils.time_format import format_duration, format_hour, format_hour_range, hour_label


@pytest.mark.parametrize("hour,expected", [
    (0, "00:00"),
    (9.5, "09:30"),
    (13.25, "13:15"),
    (23.99, "23:59"),
    (24, "24:00"),
    (-2, "00:00"),
    (30, "24:00"),
])
def test_format_hour(hour, expected):
    assert format_hour(hour) == expected


def test_format_hour_range():
    assert format_hour_range(9.5, 2.25) == "09:30 - 11:45"


def test_format_duration():
    assert format_duration(1.5) == "1.5h"
    assert format_duration(2) == "2.0h"


def test_hour_label():
    assert hour_label(0) == "0:00"
    assert hour_label(9) == "9:00"
