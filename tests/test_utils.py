import math

import pytest

from ottplay_player.utils import (
    RATE_STEPS,
    clamp,
    format_rate,
    format_time,
    get_user_data_dir,
    is_stream_url,
    looks_like_hls_url,
)


@pytest.mark.parametrize(
    "seconds, expected",
    [
        (0, "0:00"),
        (5, "0:05"),
        (59.99, "0:59"),
        (65, "1:05"),
        (600, "10:00"),
        (3599, "59:59"),
        (3600, "1:00:00"),
        (3661, "1:01:01"),
        (36000, "10:00:00"),
    ],
)
def test_format_time(seconds, expected):
    assert format_time(seconds) == expected


@pytest.mark.parametrize("value", [None, math.nan, math.inf, -math.inf, -3, "abc"])
def test_format_time_invalid_values(value):
    assert format_time(value) == "0:00"


def test_format_time_accepts_numeric_strings():
    assert format_time("125") == "2:05"


def test_format_rate():
    assert format_rate(1.0) == "1x"
    assert format_rate(2) == "2x"
    assert format_rate(1.5) == "1.5x"
    assert format_rate(0.75) == "0.75x"


def test_rate_steps_include_normal():
    assert RATE_STEPS == (0.5, 0.75, 1.0, 1.25, 1.5, 1.75, 2.0)


def test_clamp():
    assert clamp(-1, 0, 10) == 0
    assert clamp(11, 0, 10) == 10
    assert clamp(4.5, 0, 10) == 4.5


def test_url_helpers():
    assert is_stream_url("https://cdn.example.com/a/master.m3u8")
    assert not is_stream_url("/local/file.mp4")
    assert looks_like_hls_url("https://cdn.example.com/a/master.M3U8?token=1")
    assert not looks_like_hls_url("https://cdn.example.com/a/movie.mp4")


def test_user_data_dir_honours_override(user_data_home):
    assert get_user_data_dir() == user_data_home
