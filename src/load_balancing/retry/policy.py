"""
Retry policy: the attempt loop.

After each attempt the policy consults its strategies in order. The first
strategy that does not skip decides the outcome:

- throw: the strategy's error is raised as is
- wait: the same request is resent after the delay
- redirect: the request URL is rewritten and the request resent

When every strategy skips, the attempt's error is raised or its response
returned; an attempt with neither is sent again. Once `max_retries` retries
have been made, the last error is raised or the last response returned
without consulting strategies.
"""

import logging
from typing import Sequence

from .config import ExponentialRetryConfig, RetryPolicyOptions
from .delay import DelayScheduler
from .strategies import (
    ExponentialRetryStrategy,
    RetryContext,
    RetryStrategy,
    ThrottlingRedirectStrategy,
    VerdictKind,
)
from ..exceptions import CancellationError, ConfigurationError, NoOutcomeError, TransportError
from ..transport.base import Transport
from ..transport.models import Request, Response

retry_policy_logger = logging.getLogger(__name__)


class RetryPolicy:
    """
    Drives attempts for one logical request at a time.

    Attributes:
        strategies: Strategies consulted in order after each attempt
        options: Retry ceiling configuration
        transport: Default transport used by `execute`
        scheduler: Delay scheduler used for WAIT verdicts
        logger: Logger for attempt flow; strategies without a logger use it too
    """

    name = "retryPolicy"

    def __init__(
        self,
        strategies: Sequence[RetryStrategy],
        options: RetryPolicyOptions | None = None,
        *,
        transport: Transport | None = None,
        scheduler: DelayScheduler | None = None,
        logger: logging.Logger | None = None,
    ):
        self.strategies = list(strategies)
        self.options = options or RetryPolicyOptions()
        self.transport = transport
        self.scheduler = scheduler or DelayScheduler()
        self.logger = logger or retry_policy_logger

    async def execute(self, request: Request, transport: Transport | None = None) -> Response:
        """
        Send a request, retrying and failing over as the strategies decide.

        Args:
            request: Request to send; its URL is rewritten on redirect
            transport: Transport for this call (default: the policy's)

        Returns:
            The final response

        Raises:
            CancellationError: If the request's abort signal fires
            TransportError: If the last attempt failed and nothing retried it
            NoOutcomeError: If the ceiling was reached without any outcome
            Exception: Whatever a strategy throws, unchanged
        """
        transport = transport or self.transport
        if transport is None:
            raise ConfigurationError("RetryPolicy.execute requires a transport")

        max_retries = self.options.max_retries
        retry_count = -1

        while True:
            retry_count += 1
            context = RetryContext(attempt_count=retry_count, request=request)

            try:
                self.logger.info(f"Retry {retry_count}: Attempting to send request to {request.url}")
                context.response = await transport.send(request)
                if context.response is not None:
                    self.logger.info(
                        f"Retry {retry_count}: Received a response with status {context.response.status_code}"
                    )
            except TransportError as e:
                self.logger.error(f"Retry {retry_count}: Received an error from request: {e}")
                # Strategies may still act on a response attached to the error
                context.error = e
                context.response = e.response

            if request.aborted:
                self.logger.error(f"Retry {retry_count}: Request aborted.")
                raise CancellationError()

            if retry_count >= max_retries:
                self.logger.info(
                    f"Retry {retry_count}: Maximum retries reached. Returning the last "
                    f"received response, or throwing the last received error."
                )
                if context.error is not None:
                    raise context.error
                if context.response is not None:
                    return context.response
                raise NoOutcomeError()

            self.logger.info(f"Retry {retry_count}: Processing {len(self.strategies)} retry strategies.")

            if await self._apply_strategies(request, context):
                continue

            if context.error is not None:
                self.logger.info(
                    "None of the retry strategies could work with the received error. Throwing it."
                )
                raise context.error
            if context.response is not None:
                self.logger.info(
                    "None of the retry strategies could work with the received response. Returning it."
                )
                return context.response

            self.logger.info(f"Retry {retry_count}: No response or error received. Sending again.")

    async def _apply_strategies(self, request: Request, context: RetryContext) -> bool:
        """Act on the first non-skip verdict. Returns True when the request should be resent."""
        retry_count = context.attempt_count

        for strategy in self.strategies:
            strategy_logger = strategy.logger or self.logger
            strategy_logger.info(f"Retry {retry_count}: Processing retry strategy {strategy.name}.")

            verdict = strategy.retry(context)

            if verdict.kind is VerdictKind.SKIP:
                strategy_logger.info(f"Retry {retry_count}: Skipped.")
                continue

            if verdict.kind is VerdictKind.THROW:
                strategy_logger.error(
                    f"Retry {retry_count}: Retry strategy {strategy.name} throws error: {verdict.error!r}"
                )
                raise verdict.error

            if verdict.kind is VerdictKind.WAIT:
                strategy_logger.warning(
                    f"Retry {retry_count}: Retry strategy {strategy.name} retries after {verdict.delay_ms:.0f}ms"
                )
                await self.scheduler.wait(verdict.delay_ms, request.abort_signal)
                return True

            strategy_logger.warning(
                f"Retry {retry_count}: Retry strategy {strategy.name} redirects to {verdict.redirect_to}"
            )
            request.url = verdict.redirect_to
            return True

        return False


def load_balanced_retry_policy(
    endpoints: Sequence[str],
    max_retries: int = 3,
    *,
    backoff: ExponentialRetryConfig | None = None,
    transport: Transport | None = None,
    logger: logging.Logger | None = None,
) -> RetryPolicy:
    """
    Build a policy that fails over to the next endpoint when throttled and
    backs off exponentially on transient failures.

    Args:
        endpoints: Base URLs, primary first
        max_retries: Retries allowed after the initial attempt
        backoff: Exponential backoff configuration
        transport: Default transport for the policy
        logger: Logger injected into the policy

    Returns:
        Configured RetryPolicy
    """
    return RetryPolicy(
        [
            ThrottlingRedirectStrategy(endpoints),
            ExponentialRetryStrategy(backoff),
        ],
        RetryPolicyOptions(max_retries=max_retries),
        transport=transport,
        logger=logger,
    )
