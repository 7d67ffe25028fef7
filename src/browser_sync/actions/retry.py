"""Bounded retry of a single browser action on transient Selenium failures."""

from enum import Enum
from typing import Any, Awaitable, Callable, Union

from selenium.common.exceptions import (
    ElementClickInterceptedException,
    ElementNotInteractableException,
    StaleElementReferenceException,
)

from ..exceptions import ActionFailedError
from ..waiting.outcome import WaitResult, WaitSpec
from ..waiting.waiter import Waiter

import logging
logger = logging.getLogger(__name__)


class FailureKind(str, Enum):
    TRANSIENT = "transient"
    FATAL = "fatal"


TRANSIENT_EXCEPTIONS = (
    StaleElementReferenceException,
    ElementNotInteractableException,
    ElementClickInterceptedException,
)
"""Failures expected to clear up once the page re-renders or an overlay goes away."""


Classifier = Callable[[BaseException], Union[FailureKind, str]]


def classify_selenium_error(error: BaseException) -> FailureKind:
    """
    Classify an action failure.

    Detached (stale) elements, elements that are not interactable yet and clicks
    landing on an overlay are transient. Everything else is fatal.
    """
    if isinstance(error, TRANSIENT_EXCEPTIONS):
        return FailureKind.TRANSIENT
    return FailureKind.FATAL


def _is_transient(classify: Classifier, error: BaseException) -> bool:
    return FailureKind(classify(error)) is FailureKind.TRANSIENT


def _log_readiness(first: BaseException, readiness: WaitResult) -> None:
    if not readiness.ok:
        logger.warning(
            f"Retrying after {type(first).__name__} although the readiness wait "
            f"ended with {readiness.last_outcome}"
        )


def retry_action(
    waiter: Waiter,
    action: Callable[[], Any],
    spec: WaitSpec,
    classify: Classifier = classify_selenium_error,
) -> Any:
    """
    Run action(), retrying it at most once after a transient failure.

    Args:
        waiter: Waiter of the session the action runs in
        action: Zero-argument callable performing one browser action
        spec: Readiness wait to run between the failure and the retry
        classify: Maps an exception to "transient" or "fatal"

    Returns:
        The result of the first successful attempt

    Raises:
        The original exception, unchanged, when it is classified fatal.
        ActionFailedError when the retry fails too, with the original and
        retried failures and the readiness result attached. The retry is made
        even when the readiness wait timed out or failed.
    """
    try:
        return action()
    except Exception as first:
        if not _is_transient(classify, first):
            raise
        logger.warning(
            f"Transient failure ({type(first).__name__}: {first}); "
            f"waiting for {spec.condition.name} before retrying once"
        )
        readiness = waiter.wait(spec)
        _log_readiness(first, readiness)
        try:
            return action()
        except Exception as second:
            raise ActionFailedError(first, second, readiness) from second


async def retry_action_async(
    waiter: Waiter,
    action: Callable[[], Awaitable[Any]],
    spec: WaitSpec,
    classify: Classifier = classify_selenium_error,
) -> Any:
    """Coroutine version of retry_action(); action is awaited, the wait yields."""
    try:
        return await action()
    except Exception as first:
        if not _is_transient(classify, first):
            raise
        logger.warning(
            f"Transient failure ({type(first).__name__}: {first}); "
            f"waiting for {spec.condition.name} before retrying once"
        )
        readiness = await waiter.wait_async(spec)
        _log_readiness(first, readiness)
        try:
            return await action()
        except Exception as second:
            raise ActionFailedError(first, second, readiness) from second


__all__ = [
    "FailureKind",
    "TRANSIENT_EXCEPTIONS",
    "Classifier",
    "classify_selenium_error",
    "retry_action",
    "retry_action_async",
]
