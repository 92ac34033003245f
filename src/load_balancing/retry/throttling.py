"""
Throttling detection.

A response is throttled when its status is 429 or 503. The wait it asks
for comes from the first header in this order that holds a valid value:

    "retry-after-ms", "x-ms-retry-after-ms" : milliseconds
    "Retry-After"                            : seconds, or an HTTP date
"""

import math
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Callable

from ..transport.models import Response

THROTTLING_STATUS_CODES = frozenset({429, 503})

RETRY_AFTER_MS_HEADER = "retry-after-ms"
MS_RETRY_AFTER_MS_HEADER = "x-ms-retry-after-ms"
RETRY_AFTER_HEADER = "Retry-After"

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _parse_number(value: str) -> float | None:
    """Parse a header value as a finite, non-negative number."""
    try:
        number = float(value)
    except ValueError:
        return None
    if not math.isfinite(number) or number < 0:
        return None
    return number


def _parse_milliseconds(value: str, now: Clock) -> float | None:
    return _parse_number(value)


def _parse_seconds_or_date(value: str, now: Clock) -> float | None:
    seconds = _parse_number(value)
    if seconds is not None:
        return seconds * 1000

    try:
        target = parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError):
        return None
    if target is None:
        return None
    if target.tzinfo is None:
        target = target.replace(tzinfo=timezone.utc)

    delta_ms = (target - now()).total_seconds() * 1000
    if not math.isfinite(delta_ms):
        return None
    # A date in the past means retry straight away
    return max(0.0, delta_ms)


RETRY_AFTER_PARSERS: tuple[tuple[str, Callable[[str, Clock], float | None]], ...] = (
    (RETRY_AFTER_MS_HEADER, _parse_milliseconds),
    (MS_RETRY_AFTER_MS_HEADER, _parse_milliseconds),
    (RETRY_AFTER_HEADER, _parse_seconds_or_date),
)


def is_throttled(response: Response | None) -> bool:
    """Check whether a response carries a throttling status code."""
    return response is not None and response.status_code in THROTTLING_STATUS_CODES


def retry_after_ms(response: Response | None, now: Clock | None = None) -> float | None:
    """
    Resolve how long a throttled response asks the caller to wait.

    Args:
        response: Response to inspect
        now: Clock returning an aware datetime (default: current UTC time)

    Returns:
        Wait in milliseconds, or None when the response is not throttled or
        no header holds a usable value. 0 is a valid wait.
    """
    if not is_throttled(response):
        return None

    clock = now or _utcnow
    for header, parse in RETRY_AFTER_PARSERS:
        value = response.headers.get(header)
        if not value:
            continue
        wait_ms = parse(value.strip(), clock)
        if wait_ms is not None:
            return wait_ms
    return None
