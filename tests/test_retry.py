import asyncio
import logging

import pytest
from selenium.common.exceptions import (
    ElementClickInterceptedException,
    ElementNotInteractableException,
    InvalidSelectorException,
    NoSuchElementException,
    StaleElementReferenceException,
)

from browser_sync import (
    ActionFailedError,
    Condition,
    Failed,
    FailureKind,
    Pending,
    Satisfied,
    classify_selenium_error,
    predicate,
    retry_action,
    retry_action_async,
)

from _utils import FakeClock, make_session

## We DO NOT want to use pytest-asyncio.
## Instead, use event_loop.run_until_complete()!


@pytest.fixture(scope="function")
def event_loop():
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    yield loop
    loop.close()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def session(clock):
    return make_session(clock=clock)


READY = predicate("ready", lambda d: True)


class Flaky:
    """Action raising the queued errors in turn, then returning `result`."""

    def __init__(self, *errors, result="done"):
        self.errors = list(errors)
        self.result = result
        self.calls = 0

    def __call__(self):
        self.calls += 1
        if self.errors:
            raise self.errors.pop(0)
        return self.result


def readiness_counter(outcome):
    calls = []

    def evaluate(driver):
        calls.append(1)
        return outcome

    return Condition("readiness", evaluate), calls


# --------------------------------------------------------------------------
# Classification
# --------------------------------------------------------------------------

@pytest.mark.parametrize("error", [
    StaleElementReferenceException("stale"),
    ElementNotInteractableException("not interactable"),
    ElementClickInterceptedException("intercepted"),
])
def test_transient_selenium_errors(error):
    assert classify_selenium_error(error) is FailureKind.TRANSIENT


@pytest.mark.parametrize("error", [
    NoSuchElementException("missing"),
    InvalidSelectorException("bad xpath"),
    AssertionError("wrong text"),
    ValueError("bad input"),
])
def test_everything_else_is_fatal(error):
    assert classify_selenium_error(error) is FailureKind.FATAL


# --------------------------------------------------------------------------
# retry_action
# --------------------------------------------------------------------------

def test_success_runs_once_without_waiting(session, clock):
    readiness, checks = readiness_counter(Satisfied(True))
    action = Flaky()

    assert session.retry(action, readiness) == "done"
    assert action.calls == 1
    assert checks == []
    assert clock.sleeps == []


def test_fatal_failure_propagates_without_wait(session, clock):
    readiness, checks = readiness_counter(Satisfied(True))
    error = NoSuchElementException("no such element: #checkout")
    action = Flaky(error)

    with pytest.raises(NoSuchElementException) as exc_info:
        session.retry(action, readiness)

    assert exc_info.value is error
    assert action.calls == 1
    assert checks == []
    assert clock.sleeps == []


def test_transient_failure_waits_then_retries_once(session):
    readiness, checks = readiness_counter(Satisfied(True))
    action = Flaky(StaleElementReferenceException("stale"))

    assert session.retry(action, readiness) == "done"
    assert action.calls == 2
    assert checks == [1]


def test_second_failure_raises_with_both_attached(session):
    first = ElementClickInterceptedException("overlay")
    second = ElementClickInterceptedException("overlay again")
    action = Flaky(first, second, StaleElementReferenceException("never reached"))

    with pytest.raises(ActionFailedError) as exc_info:
        session.retry(action, READY)

    err = exc_info.value
    assert err.original is first
    assert err.retried is second
    assert err.readiness.ok
    assert err.__cause__ is second
    assert action.calls == 2


def test_fatal_on_retry_is_still_wrapped(session):
    action = Flaky(StaleElementReferenceException("stale"), NoSuchElementException("gone"))
    with pytest.raises(ActionFailedError) as exc_info:
        session.retry(action, READY)
    assert isinstance(exc_info.value.retried, NoSuchElementException)


def test_readiness_timeout_still_retries(session, clock):
    readiness, checks = readiness_counter(Pending("readiness"))
    action = Flaky(ElementNotInteractableException("not yet"))

    assert session.retry(action, readiness, timeout=0.4, poll_interval=0.2) == "done"
    assert action.calls == 2
    assert len(checks) == 2
    assert sum(clock.sleeps) == pytest.approx(0.4)


def test_readiness_failure_still_retries_once(session, caplog):
    readiness, checks = readiness_counter(Failed("browsing context closed"))
    first = StaleElementReferenceException("stale")
    second = StaleElementReferenceException("stale again")
    action = Flaky(first, second)

    with caplog.at_level(logging.WARNING, logger="browser_sync.actions.retry"):
        with pytest.raises(ActionFailedError) as exc_info:
            session.retry(action, readiness)

    err = exc_info.value
    assert action.calls == 2
    assert checks == [1]
    assert err.original is first
    assert err.retried is second
    assert err.readiness.failed
    assert "browsing context closed" in str(err)
    assert "readiness wait ended with failed" in caplog.text


def test_readiness_failure_retry_can_succeed(session):
    readiness, _ = readiness_counter(Failed("spinner detached"))
    action = Flaky(ElementNotInteractableException("not yet"))
    assert session.retry(action, readiness) == "done"
    assert action.calls == 2


def test_readiness_timeout_defaults_to_retry_timeout(session, clock):
    readiness, _ = readiness_counter(Pending("readiness"))
    session.retry(Flaky(StaleElementReferenceException("stale")), readiness)
    assert sum(clock.sleeps) == pytest.approx(session.config["retry_timeout"])


def test_custom_classifier(session):
    calls = []

    def classify(error):
        calls.append(error)
        return "transient" if isinstance(error, AssertionError) else "fatal"

    action = Flaky(AssertionError("badge shows 0"))
    assert session.retry(action, READY, classify) == "done"
    assert len(calls) == 1


def test_retry_is_logged_as_warning(session, caplog):
    with caplog.at_level(logging.WARNING, logger="browser_sync.actions.retry"):
        session.retry(Flaky(StaleElementReferenceException("stale")), READY)
    assert "Transient failure (StaleElementReferenceException" in caplog.text
    assert "waiting for ready before retrying once" in caplog.text


def test_module_function_with_explicit_spec(session):
    spec = session.spec(READY, timeout=1.0)
    action = Flaky(StaleElementReferenceException("stale"))
    assert retry_action(session.waiter, action, spec) == "done"


# --------------------------------------------------------------------------
# retry_action_async
# --------------------------------------------------------------------------

class AsyncFlaky(Flaky):
    async def __call__(self):
        return Flaky.__call__(self)


def test_async_transient_failure_retries_once(event_loop, session):
    readiness, checks = readiness_counter(Satisfied(True))
    action = AsyncFlaky(StaleElementReferenceException("stale"))

    result = event_loop.run_until_complete(session.retry_async(action, readiness))

    assert result == "done"
    assert action.calls == 2
    assert checks == [1]


def test_async_fatal_failure_propagates(event_loop, session, clock):
    action = AsyncFlaky(NoSuchElementException("missing"))
    with pytest.raises(NoSuchElementException):
        event_loop.run_until_complete(session.retry_async(action, READY))
    assert action.calls == 1
    assert clock.sleeps == []


def test_async_second_failure_raises(event_loop, session):
    action = AsyncFlaky(
        StaleElementReferenceException("stale"),
        StaleElementReferenceException("stale again"),
    )
    spec = session.spec(READY)
    with pytest.raises(ActionFailedError):
        event_loop.run_until_complete(retry_action_async(session.waiter, action, spec))
    assert action.calls == 2


def test_async_readiness_failure_still_retries_once(event_loop, session):
    readiness, checks = readiness_counter(Failed("browsing context closed"))
    action = AsyncFlaky(StaleElementReferenceException("stale"))

    result = event_loop.run_until_complete(session.retry_async(action, readiness))

    assert result == "done"
    assert action.calls == 2
    assert checks == [1]
