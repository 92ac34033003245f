"""Tests for throttling detection - behavior focused."""

from datetime import datetime, timedelta, timezone

import pytest

from load_balancing.retry import is_throttled, retry_after_ms

from conftest import create_response


FIXED_NOW = datetime(2030, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def fixed_clock() -> datetime:
    return FIXED_NOW


class TestIsThrottled:
    """Test throttling status classification."""

    @pytest.mark.parametrize("status", [429, 503])
    def test_throttling_statuses(self, status):
        """429 and 503 are throttling responses."""
        assert is_throttled(create_response(status)) is True

    def test_success_never_throttled(self):
        """Given 200 with wait headers, not throttled."""
        response = create_response(
            200, {"retry-after-ms": "500", "Retry-After": "2"}
        )

        assert is_throttled(response) is False
        assert retry_after_ms(response) is None

    @pytest.mark.parametrize("status", [408, 500, 502, 504])
    def test_other_errors_not_throttled(self, status):
        """Other error statuses are not throttling."""
        assert is_throttled(create_response(status, {"Retry-After": "1"})) is False

    def test_missing_response_not_throttled(self):
        """No response is not throttled."""
        assert is_throttled(None) is False
        assert retry_after_ms(None) is None


class TestRetryAfterMs:
    """Test wait duration resolution."""

    def test_zero_is_a_valid_wait(self):
        """Given retry-after-ms: 0, wait is 0, not absent."""
        response = create_response(429, {"retry-after-ms": "0"})

        assert is_throttled(response) is True
        assert retry_after_ms(response) == 0

    def test_ms_header_wins_over_retry_after(self):
        """Given both headers, the millisecond header wins."""
        response = create_response(429, {"retry-after-ms": "500", "Retry-After": "2"})

        assert retry_after_ms(response) == 500

    def test_x_ms_header_used_when_first_absent(self):
        """x-ms-retry-after-ms comes second in precedence."""
        response = create_response(
            503, {"x-ms-retry-after-ms": "250", "Retry-After": "2"}
        )

        assert retry_after_ms(response) == 250

    def test_invalid_ms_header_falls_through(self):
        """An unparseable ms header is skipped, not fatal."""
        response = create_response(429, {"retry-after-ms": "soon", "Retry-After": "3"})

        assert retry_after_ms(response) == 3000

    def test_retry_after_seconds_converted(self):
        """Retry-After seconds are converted to milliseconds."""
        response = create_response(429, {"Retry-After": "2"})

        assert retry_after_ms(response) == 2000

    def test_headers_are_case_insensitive(self):
        """Header lookup ignores case."""
        response = create_response(429, {"RETRY-AFTER-MS": "40"})

        assert retry_after_ms(response) == 40

    def test_future_date_gives_positive_delta(self):
        """Retry-After as a future HTTP date resolves to a positive wait."""
        response = create_response(429, {"Retry-After": "Wed, 21 Oct 2050 07:28:00 GMT"})

        assert retry_after_ms(response) > 0

    def test_future_date_relative_to_clock(self):
        """The date delta is computed against the supplied clock."""
        target = FIXED_NOW + timedelta(seconds=30)
        header = target.strftime("%a, %d %b %Y %H:%M:%S GMT")
        response = create_response(429, {"Retry-After": header})

        assert retry_after_ms(response, now=fixed_clock) == 30000

    def test_past_date_clamped_to_zero(self):
        """A past date resolves to 0, never negative."""
        response = create_response(503, {"Retry-After": "Wed, 21 Oct 2015 07:28:00 GMT"})

        assert retry_after_ms(response) == 0

    def test_garbage_retry_after_is_absent(self):
        """Neither number nor date means no usable wait."""
        response = create_response(429, {"Retry-After": "whenever"})

        assert is_throttled(response) is True
        assert retry_after_ms(response) is None

    def test_throttled_without_headers(self):
        """Throttled with no header: throttled, but no delay."""
        response = create_response(429)

        assert is_throttled(response) is True
        assert retry_after_ms(response) is None

    @pytest.mark.parametrize("value", ["-5", "nan", "inf"])
    def test_negative_and_non_finite_rejected(self, value):
        """Negative and non-finite numbers are not valid waits."""
        response = create_response(429, {"retry-after-ms": value})

        assert retry_after_ms(response) is None
