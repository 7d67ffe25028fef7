"""
The polling loop.

A Waiter is bound to one driver. It evaluates a Condition, sleeps for the poll
interval while the condition is pending, and stops on the first satisfied or
failed outcome or when the timeout elapses. Timeouts are returned as values
(TimedOut), never raised; callers that want fail-fast behaviour call
result.unwrap().

Thread Safety:
    One wait per driver at a time. Independent drivers may be waited on from
    different threads; a Waiter holds no state between calls.
"""

import time
import asyncio
from typing import Callable, Optional

from ..constants import LOG_POLLS
from ..config.environment import get_env_config
from ..utils.diagnostics import describe_session
from .condition import Condition
from .outcome import Failed, Ok, Outcome, Pending, Satisfied, TimedOut, WaitResult, WaitSpec

import logging
logger = logging.getLogger(__name__)


class Waiter:
    """
    Poll conditions against a single driver.

    Args:
        driver: Selenium WebDriver (or compatible) the conditions are evaluated on
        config: Dict with "timeout" and "poll_interval" defaults (from the environment if None)
        clock: Monotonic clock in seconds
        sleep: Blocking sleep used by wait()
        async_sleep: Coroutine sleep used by wait_async()
    """

    def __init__(
        self,
        driver,
        *,
        config: Optional[dict] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        async_sleep=asyncio.sleep,
    ):
        self.driver = driver
        self.config = config if config is not None else get_env_config()
        self._clock = clock
        self._sleep = sleep
        self._async_sleep = async_sleep

    def spec(
        self,
        condition: Condition,
        timeout: Optional[float] = None,
        poll_interval: Optional[float] = None,
    ) -> WaitSpec:
        """Build a WaitSpec, filling unset values from the configured defaults."""
        if timeout is None:
            timeout = self.config["timeout"]
        if poll_interval is None:
            poll_interval = self.config["poll_interval"]
        if poll_interval > timeout:
            logger.debug(
                f"Poll interval {poll_interval}s exceeds timeout {timeout}s for "
                f"{condition.name}; it will be evaluated once"
            )
        return WaitSpec(condition=condition, timeout=timeout, poll_interval=poll_interval)

    # ------------------------------------------------------------------
    # Shared bookkeeping
    # ------------------------------------------------------------------

    def _settle(self, spec: WaitSpec, outcome: Outcome, start: float, polls: int) -> Optional[WaitResult]:
        """Return the final result for this poll, or None to keep polling."""
        elapsed = self._clock() - start
        name = spec.condition.name

        if LOG_POLLS:
            logger.debug(f"Poll {polls} of {name} at {elapsed:.3f}s: {outcome}")

        if isinstance(outcome, Satisfied):
            logger.debug(f"Condition satisfied: {name} (elapsed: {elapsed:.3f}s, polls: {polls})")
            return Ok(outcome.value, elapsed, polls)

        if isinstance(outcome, Failed):
            logger.debug(f"Condition failed: {name}: {outcome.reason} (elapsed: {elapsed:.3f}s)")
            return TimedOut(name, outcome, elapsed, polls)

        if not isinstance(outcome, Pending):
            raise TypeError(f"Condition {name} returned {outcome!r}, expected an Outcome")

        if elapsed >= spec.timeout:
            return self._timed_out(spec, outcome, start, polls)
        return None

    def _timed_out(self, spec: WaitSpec, outcome: Outcome, start: float, polls: int) -> TimedOut:
        elapsed = self._clock() - start
        logger.info(
            f"Timed out waiting for {spec.condition.name} after {elapsed:.3f}s "
            f"({polls} polls): {outcome}"
        )
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Session state at timeout:\n{describe_session(self.driver)}")
        return TimedOut(spec.condition.name, outcome, elapsed, polls)

    def _delay(self, spec: WaitSpec, start: float) -> float:
        remaining = spec.timeout - (self._clock() - start)
        return max(0.0, min(spec.poll_interval, remaining))

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def wait(self, spec: WaitSpec) -> WaitResult:
        """
        Poll spec.condition until it is satisfied, fails, or spec.timeout elapses.

        A satisfied first poll returns without any sleep. A timeout of zero
        evaluates exactly once. The sleep never extends past the timeout, and the
        deadline is checked after each sleep before evaluating again.
        """
        evaluate = spec.condition.evaluator()
        start = self._clock()
        polls = 0

        while True:
            outcome = evaluate(self.driver)
            polls += 1
            result = self._settle(spec, outcome, start, polls)
            if result is not None:
                return result

            self._sleep(self._delay(spec, start))
            if self._clock() - start >= spec.timeout:
                return self._timed_out(spec, outcome, start, polls)

    def until(
        self,
        condition: Condition,
        timeout: Optional[float] = None,
        poll_interval: Optional[float] = None,
    ) -> WaitResult:
        """wait() with a spec built from the configured defaults."""
        return self.wait(self.spec(condition, timeout, poll_interval))

    async def wait_async(self, spec: WaitSpec) -> WaitResult:
        """Same loop as wait(), yielding to the event loop between polls."""
        evaluate = spec.condition.evaluator()
        start = self._clock()
        polls = 0

        while True:
            outcome = evaluate(self.driver)
            polls += 1
            result = self._settle(spec, outcome, start, polls)
            if result is not None:
                return result

            await self._async_sleep(self._delay(spec, start))
            if self._clock() - start >= spec.timeout:
                return self._timed_out(spec, outcome, start, polls)

    async def until_async(
        self,
        condition: Condition,
        timeout: Optional[float] = None,
        poll_interval: Optional[float] = None,
    ) -> WaitResult:
        return await self.wait_async(self.spec(condition, timeout, poll_interval))


__all__ = ["Waiter"]
