"""
Explicit per-driver session state.

A BrowserSession bundles one driver with the Waiter, ContextRegistry and
DialogHandler that operate on it. It is passed around explicitly; there is no
module-level driver and no global singleton.

Thread Safety:
    A BrowserSession is NOT thread-safe: all waits, switches and actions of one
    session run sequentially. Run independent sessions in parallel instead.

Usage:
    from browser_sync import BrowserSession, conditions

    session = BrowserSession.attach(driver, timeout=5)
    session.wait(conditions.url_contains("/inventory")).unwrap()
    with session.contexts.switched_to(new_handle):
        ...
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from .actions.retry import Classifier, classify_selenium_error, retry_action, retry_action_async
from .config.environment import get_env_config, merge_config
from .dialogs.handler import DialogHandler
from .utils.diagnostics import describe_session
from .waiting.condition import Condition
from .waiting.outcome import WaitResult, WaitSpec
from .waiting.waiter import Waiter
from .windows.registry import ContextRegistry


@dataclass
class BrowserSession:
    """
    Encapsulates the synchronization state of one browser session.

    Attributes:
        driver: Selenium WebDriver instance
        config: Dict with "timeout", "poll_interval" and "retry_timeout" in seconds
        waiter: Polls conditions against driver (built from config if None)
        contexts: Window/tab registry of driver
        dialogs: Native dialog handler of driver
    """

    driver: Any
    config: Optional[dict] = field(default_factory=get_env_config)

    waiter: Optional[Waiter] = field(default=None, repr=False)
    contexts: ContextRegistry = field(init=False, repr=False)
    dialogs: DialogHandler = field(init=False, repr=False)

    def __post_init__(self):
        if self.config is None:
            self.config = get_env_config()
        if self.waiter is None:
            self.waiter = Waiter(self.driver, config=self.config)
        self.contexts = ContextRegistry(self.driver, self.waiter)
        self.dialogs = DialogHandler(self.driver, self.waiter)

    @classmethod
    def attach(
        cls,
        driver,
        *,
        timeout: Optional[float] = None,
        poll_interval: Optional[float] = None,
        retry_timeout: Optional[float] = None,
    ) -> "BrowserSession":
        """Create a session from environment config with explicit overrides."""
        config = merge_config({
            "timeout": timeout,
            "poll_interval": poll_interval,
            "retry_timeout": retry_timeout,
        })
        return cls(driver=driver, config=config)

    def spec(
        self,
        condition: Condition,
        timeout: Optional[float] = None,
        poll_interval: Optional[float] = None,
    ) -> WaitSpec:
        return self.waiter.spec(condition, timeout, poll_interval)

    def wait(
        self,
        condition: Condition,
        timeout: Optional[float] = None,
        poll_interval: Optional[float] = None,
    ) -> WaitResult:
        return self.waiter.until(condition, timeout, poll_interval)

    async def wait_async(
        self,
        condition: Condition,
        timeout: Optional[float] = None,
        poll_interval: Optional[float] = None,
    ) -> WaitResult:
        return await self.waiter.until_async(condition, timeout, poll_interval)

    def _readiness_spec(self, readiness: Condition, timeout, poll_interval) -> WaitSpec:
        if timeout is None:
            timeout = self.config["retry_timeout"]
        return self.waiter.spec(readiness, timeout, poll_interval)

    def retry(
        self,
        action: Callable[[], Any],
        readiness: Condition,
        classify: Classifier = classify_selenium_error,
        timeout: Optional[float] = None,
        poll_interval: Optional[float] = None,
    ) -> Any:
        """Run action with one bounded retry; readiness is waited on before the retry."""
        spec = self._readiness_spec(readiness, timeout, poll_interval)
        return retry_action(self.waiter, action, spec, classify)

    async def retry_async(
        self,
        action,
        readiness: Condition,
        classify: Classifier = classify_selenium_error,
        timeout: Optional[float] = None,
        poll_interval: Optional[float] = None,
    ) -> Any:
        spec = self._readiness_spec(readiness, timeout, poll_interval)
        return await retry_action_async(self.waiter, action, spec, classify)

    def describe(self, exc: Optional[BaseException] = None) -> str:
        """Diagnostic summary of the driver state, for logs and bug reports."""
        return describe_session(self.driver, exc)


__all__ = [
    "BrowserSession",
]
