"""Context registry for tracking browser windows/tabs and the current one."""

import contextlib
from dataclasses import dataclass
from typing import Any, Callable, FrozenSet, Iterable, List, Optional

from selenium.common.exceptions import NoSuchWindowException

from ..exceptions import ContextNotFoundError, ContextRestoreError
from ..waiting.condition import Condition, guarded
from ..waiting.outcome import Outcome, Pending, Satisfied, WaitResult
from ..waiting.waiter import Waiter

import logging
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BrowsingContext:
    """One window or tab of a session, identified by its opaque handle."""

    handle: str
    is_current: bool = False


class ContextRegistry:
    """
    Single source of truth for which browsing context is current.

    Every read goes to the live driver; nothing is cached, so contexts opened by
    page actions or closed by the site show up on the next call. Only
    switch_to(), the scoped helpers and open/close_context() move the current
    context; conditions built here only observe.

    Args:
        driver: Selenium WebDriver (or compatible)
        waiter: Waiter used by the wait_for_* helpers (a new one if None)
    """

    def __init__(self, driver, waiter: Optional[Waiter] = None):
        self.driver = driver
        self.waiter = waiter if waiter is not None else Waiter(driver)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def _current_handle(self) -> Optional[str]:
        """Handle the driver is pointed at, or None if that window was closed."""
        try:
            return self.driver.current_window_handle
        except NoSuchWindowException:
            return None

    def handles(self) -> List[str]:
        return list(self.driver.window_handles)

    def list_contexts(self) -> FrozenSet[BrowsingContext]:
        """
        Snapshot of the open contexts, with the one the driver points at marked current.

        Once the current window has been closed the driver points at nothing, so
        no context in the set is marked current until switch_to() is called.
        """
        current = self._current_handle()
        return frozenset(BrowsingContext(h, h == current) for h in self.handles())

    def current(self) -> BrowsingContext:
        handle = self._current_handle()
        if handle is None or handle not in self.handles():
            raise ContextNotFoundError(handle, "The current browsing context has been closed")
        return BrowsingContext(handle, True)

    # ------------------------------------------------------------------
    # Switching
    # ------------------------------------------------------------------

    def switch_to(self, handle: str) -> BrowsingContext:
        """
        Make `handle` the current context.

        Raises ContextNotFoundError if the handle is gone, including when it
        closes between the existence check and the switch.
        """
        if handle not in self.handles():
            raise ContextNotFoundError(handle)
        try:
            self.driver.switch_to.window(handle)
        except NoSuchWindowException as e:
            raise ContextNotFoundError(handle) from e
        logger.debug(f"Switched to browsing context {handle}")
        return BrowsingContext(handle, True)

    def _restore(self, handle: str) -> None:
        if handle not in self.handles():
            active = self._current_handle()
            logger.info(f"Cannot restore browsing context {handle}: closed (active: {active})")
            raise ContextRestoreError(handle, active)
        try:
            self.driver.switch_to.window(handle)
        except NoSuchWindowException as e:
            raise ContextRestoreError(handle, self._current_handle()) from e
        logger.debug(f"Restored browsing context {handle}")

    @contextlib.contextmanager
    def switched_to(self, handle: str):
        """
        Run the with-block in `handle`, then return to the previous context.

        The previous context is restored on every exit path. If it was closed in
        the meantime, ContextRestoreError is raised instead of landing on some
        other window; an exception from the block stays attached as __context__.
        """
        original = self._current_handle()
        if original is None:
            raise ContextNotFoundError(None, "No current browsing context to return to")

        context = self.switch_to(handle)
        try:
            yield context
        finally:
            self._restore(original)

    def with_context(self, handle: str, body: Callable[[], Any]) -> Any:
        """Call body() with `handle` current and return its result; see switched_to()."""
        with self.switched_to(handle):
            return body()

    # ------------------------------------------------------------------
    # Opening and closing
    # ------------------------------------------------------------------

    def open_context(self, kind: str = "tab") -> BrowsingContext:
        """Open a new tab (or "window") and make it current."""
        self.driver.switch_to.new_window(kind)
        handle = self.driver.current_window_handle
        logger.debug(f"Opened browsing context {handle} ({kind})")
        return BrowsingContext(handle, True)

    def close_context(self, handle: str, return_to: str) -> BrowsingContext:
        """Close `handle` and make `return_to` current (ContextRestoreError if it is gone)."""
        if handle == return_to:
            raise ValueError("Cannot return to the context being closed")
        self.switch_to(handle)
        self.driver.close()
        logger.debug(f"Closed browsing context {handle}")
        self._restore(return_to)
        return BrowsingContext(return_to, True)

    @contextlib.contextmanager
    def within_frame(self, frame):
        """
        Enter an iframe for the with-block and return to the top-level document.

        `frame` may be a locator tuple, a located element, a frame name or an index.
        """
        target = self.driver.find_element(*frame) if isinstance(frame, tuple) else frame
        self.driver.switch_to.frame(target)
        try:
            yield
        finally:
            self.driver.switch_to.default_content()

    # ------------------------------------------------------------------
    # Conditions and waits
    # ------------------------------------------------------------------

    def context_count(self, count: int) -> Condition:
        """Satisfied with the set of contexts once exactly `count` are open."""
        name = f"{count} browsing contexts"

        def evaluate(driver) -> Outcome:
            def check(_d):
                contexts = self.list_contexts()
                if len(contexts) == count:
                    return Satisfied(contexts)
                return Pending(name, f"{len(contexts)} open")

            return guarded(name, check, driver)

        return Condition(name, evaluate)

    def new_context(self, known_handles: Iterable[str]) -> Condition:
        """Satisfied with the first handle that is not in known_handles."""
        known = frozenset(known_handles)
        name = f"new browsing context besides {sorted(known)}"

        def evaluate(driver) -> Outcome:
            def check(_d):
                fresh = [h for h in self.handles() if h not in known]
                return Satisfied(fresh[0]) if fresh else Pending(name)

            return guarded(name, check, driver)

        return Condition(name, evaluate)

    def wait_for_context_count(
        self,
        count: int,
        timeout: Optional[float] = None,
        poll_interval: Optional[float] = None,
    ) -> WaitResult:
        return self.waiter.until(self.context_count(count), timeout, poll_interval)

    def wait_for_new_context(
        self,
        known_handles: Iterable[str],
        timeout: Optional[float] = None,
        poll_interval: Optional[float] = None,
    ) -> WaitResult:
        """Wait for a context that is not in known_handles; Ok carries its handle."""
        return self.waiter.until(self.new_context(known_handles), timeout, poll_interval)


__all__ = [
    "BrowsingContext",
    "ContextRegistry",
]
