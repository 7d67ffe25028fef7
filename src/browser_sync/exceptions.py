"""Exceptions raised by the synchronization core."""

from typing import Optional


class BrowserSyncError(Exception):
    """Base exception for all synchronization failures."""

    pass


class WaitTimeoutError(BrowserSyncError, TimeoutError):
    """A condition never became satisfied within its timeout."""

    def __init__(self, condition_name: str, elapsed: float, last_outcome=None):
        self.condition_name = condition_name
        self.elapsed = elapsed
        self.last_outcome = last_outcome
        super().__init__(
            f"Timed out after {elapsed:.3f}s waiting for {condition_name}"
            + (f" (last: {last_outcome})" if last_outcome is not None else "")
        )


class ConditionFailedError(BrowserSyncError):
    """A condition detected a terminal state and stopped the wait."""

    def __init__(self, condition_name: str, reason: str, elapsed: float = 0.0):
        self.condition_name = condition_name
        self.reason = reason
        self.elapsed = elapsed
        super().__init__(f"{condition_name} failed after {elapsed:.3f}s: {reason}")


class ContextNotFoundError(BrowserSyncError, LookupError):
    """A browsing context handle no longer exists."""

    def __init__(self, handle: Optional[str], message: Optional[str] = None):
        self.handle = handle
        super().__init__(message or f"Browsing context {handle!r} does not exist")


class ContextRestoreError(BrowserSyncError):
    """The context to return to was closed while work ran elsewhere."""

    def __init__(self, handle: str, active_handle: Optional[str]):
        self.handle = handle
        self.active_handle = active_handle
        super().__init__(
            f"Cannot restore browsing context {handle!r}: it was closed "
            f"(active context: {active_handle!r})"
        )


class NoDialogPresentError(BrowserSyncError):
    """resolve() was called while no dialog was outstanding."""

    pass


class ActionFailedError(BrowserSyncError):
    """A wrapped action failed again after its single retry."""

    def __init__(
        self,
        original: BaseException,
        retried: BaseException,
        readiness=None,
    ):
        self.original = original
        self.retried = retried
        self.readiness = readiness
        message = (
            f"Action failed after retry: {type(retried).__name__}: {retried} "
            f"(first attempt: {type(original).__name__}: {original})"
        )
        if readiness is not None and not readiness.ok:
            message += f"; readiness wait ended with {readiness.last_outcome}"
        super().__init__(message)


__all__ = [
    "BrowserSyncError",
    "WaitTimeoutError",
    "ConditionFailedError",
    "ContextNotFoundError",
    "ContextRestoreError",
    "NoDialogPresentError",
    "ActionFailedError",
]
