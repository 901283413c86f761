from datetime import datetime, timedelta, timezone

import pytest

from llmapi.ratelimit import RateLimitHeaders, ResetTime, parse_duration


def test_from_headers_reads_all_values():
    headers = {
        "x-ratelimit-limit-requests": "60",
        "x-ratelimit-limit-tokens": "150000",
        "x-ratelimit-remaining-requests": "59",
        "x-ratelimit-remaining-tokens": "149984",
        "x-ratelimit-reset-requests": "1s",
        "x-ratelimit-reset-tokens": "6m0s",
    }
    limits = RateLimitHeaders.from_headers(headers)
    assert limits.limit_requests == 60
    assert limits.limit_tokens == 150000
    assert limits.remaining_requests == 59
    assert limits.remaining_tokens == 149984
    assert limits.reset_requests == "1s"
    assert limits.reset_tokens == "6m0s"


def test_from_headers_is_case_insensitive_and_takes_first_value():
    headers = {
        "X-RateLimit-Limit-Requests": ["60", "70"],
        "X-RATELIMIT-RESET-TOKENS": "2s",
    }
    limits = RateLimitHeaders.from_headers(headers)
    assert limits.limit_requests == 60
    assert str(limits.reset_tokens) == "2s"


def test_missing_and_malformed_headers_fall_back_to_defaults():
    headers = {
        "x-ratelimit-limit-requests": "abc",
        "x-ratelimit-limit-tokens": " 5",
        "x-ratelimit-remaining-requests": "",
    }
    assert RateLimitHeaders.from_headers(headers) == RateLimitHeaders()


@pytest.mark.parametrize(
    "left,right",
    [
        ("1h30m", "90m"),
        ("1.5h", "90m"),
        ("1000ms", "1s"),
        ("1000000us", "1s"),
        ("1000\u00b5s", "1ms"),
        ("+2s", "2s"),
        ("6m0s", "360s"),
        ("1.s", "1s"),
        (".5s", "500ms"),
    ],
)
def test_equivalent_durations(left, right):
    assert parse_duration(left) == parse_duration(right)


def test_negative_duration_is_negated():
    assert parse_duration("-2s") == -parse_duration("2s")


def test_hour_is_sixty_minutes():
    assert parse_duration("1h") == 60 * parse_duration("1m")


def test_zero_without_unit():
    assert parse_duration("0") == timedelta(0)


@pytest.mark.parametrize("text", ["", "1", "1x", ".", "s", "-", "1h2", "1..5s"])
def test_invalid_durations_raise(text):
    with pytest.raises(ValueError):
        parse_duration(text)


def test_reset_time_to_datetime_adds_duration():
    delta = parse_duration("6m0s")
    before = datetime.now(timezone.utc)
    moment = ResetTime("6m0s").to_datetime()
    after = datetime.now(timezone.utc)
    assert before + delta <= moment <= after + delta


def test_unreadable_reset_time_means_now():
    before = datetime.now(timezone.utc)
    moment = ResetTime("junk").to_datetime()
    after = datetime.now(timezone.utc)
    assert before <= moment <= after


def test_reset_time_string_form():
    reset = ResetTime("20ms")
    assert str(reset) == "20ms"
    assert reset == "20ms"