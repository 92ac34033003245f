"""
Backoff calculation.
"""

import random

from .config import ExponentialRetryConfig


def calculate_backoff(attempt: int, config: ExponentialRetryConfig) -> float:
    """
    Calculate backoff delay for a given attempt.

    Args:
        attempt: Zero-based attempt number
        config: Backoff configuration

    Returns:
        Delay in milliseconds with jitter applied
    """
    delay = config.retry_delay_ms * (2**attempt)

    # Apply max delay cap
    delay = min(delay, config.max_retry_delay_ms)

    # Apply jitter (±jitter%)
    if config.jitter > 0:
        jitter_amount = delay * config.jitter * (2 * random.random() - 1)
        delay = delay + jitter_amount

    return max(0, delay)
