import logging

import pytest

from gitfolio.errors import RateLimitExceeded
from gitfolio.services.rate_limiter import RateLimiter


def make_limiter(now=1000.0):
    clock = {"now": now}
    return RateLimiter(clock=lambda: clock["now"]), clock


def test_fresh_limiter_allows_requests():
    limiter, _ = make_limiter()
    limiter.check_and_throttle()
    assert limiter.state().remaining == 60
    assert limiter.state().reset_at is None


def test_spent_quota_refuses_until_reset():
    limiter, clock = make_limiter()
    limiter.record_response({"X-RateLimit-Remaining": "0", "X-RateLimit-Reset": "1600"})

    with pytest.raises(RateLimitExceeded) as excinfo:
        limiter.check_and_throttle()
    assert excinfo.value.retry_after_minutes == 10
    assert "Try again in 10 minutes." in str(excinfo.value)

    clock["now"] = 1600.0
    limiter.check_and_throttle()


def test_retry_minutes_round_up():
    limiter, _ = make_limiter()
    limiter.record_response({"X-RateLimit-Remaining": "0", "X-RateLimit-Reset": "1061"})
    with pytest.raises(RateLimitExceeded) as excinfo:
        limiter.check_and_throttle()
    assert excinfo.value.retry_after_minutes == 2


def test_zero_remaining_without_reset_time_passes():
    limiter, _ = make_limiter()
    limiter.record_response({"X-RateLimit-Remaining": "0"})
    limiter.check_and_throttle()
    assert limiter.state().remaining == 0


def test_missing_headers_keep_previous_state():
    limiter, _ = make_limiter()
    limiter.record_response({"X-RateLimit-Remaining": "42", "X-RateLimit-Reset": "5000"})
    limiter.record_response({})
    limiter.record_response(None)
    state = limiter.state()
    assert state.remaining == 42
    assert state.reset_at == 5000.0


def test_unparsable_header_is_ignored_with_warning(caplog):
    limiter, _ = make_limiter()
    with caplog.at_level(logging.WARNING):
        limiter.record_response({"X-RateLimit-Remaining": "lots", "X-RateLimit-Reset": "2000"})
    assert limiter.state().remaining == 60
    assert limiter.state().reset_at == 2000.0
    assert "X-RateLimit-Remaining" in caplog.text


def test_state_is_a_copy():
    limiter, _ = make_limiter()
    limiter.state().remaining = 0
    assert limiter.state().remaining == 60
