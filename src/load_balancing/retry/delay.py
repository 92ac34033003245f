"""
Abortable delays between attempts.
"""

import asyncio

from ..exceptions import CancellationError


class DelayScheduler:
    """Suspends the current task between attempts."""

    async def wait(self, delay_ms: float, abort_signal: asyncio.Event | None = None) -> None:
        """
        Sleep for `delay_ms` milliseconds.

        Args:
            delay_ms: Delay in milliseconds
            abort_signal: Event that cuts the delay short when set

        Raises:
            CancellationError: If the signal is set before the delay elapses
        """
        seconds = max(0.0, delay_ms) / 1000
        if abort_signal is None:
            await asyncio.sleep(seconds)
            return

        if abort_signal.is_set():
            raise CancellationError("The delay was aborted.")
        try:
            await asyncio.wait_for(abort_signal.wait(), timeout=seconds)
        except asyncio.TimeoutError:
            return
        raise CancellationError("The delay was aborted.")


async def delay(delay_ms: float, abort_signal: asyncio.Event | None = None) -> None:
    """Sleep for `delay_ms` milliseconds unless `abort_signal` fires first."""
    await DelayScheduler().wait(delay_ms, abort_signal)
