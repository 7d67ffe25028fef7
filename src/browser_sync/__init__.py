"""
Synchronization core for browser-driven end-to-end tests.

Waiting on eventually-consistent page state is where most flakiness in such
suites comes from: an element not attached yet, a tab that opens a moment after
the click, an alert that shows up after a login. This package replaces ad hoc
sleeps and catch-and-ignore blocks with:

- Conditions: named predicates over the driver returning Pending, Satisfied or
  Failed, composable with and_/or_/not_/stable_for.
- Waiter: a bounded polling loop that returns Ok or TimedOut as a value.
- ContextRegistry: window/tab bookkeeping with scoped switch-and-restore that
  refuses to silently land on the wrong window.
- DialogHandler: alerts, confirms and prompts as an explicit condition.
- retry_action: one bounded retry of an action after a transient failure.

Everything operates on an explicit BrowserSession wrapping a Selenium driver.
"""

from . import conditions
from .session import BrowserSession
from .exceptions import (
    BrowserSyncError,
    WaitTimeoutError,
    ConditionFailedError,
    ContextNotFoundError,
    ContextRestoreError,
    NoDialogPresentError,
    ActionFailedError,
)
from .waiting import (
    Pending,
    Satisfied,
    Failed,
    WaitSpec,
    Ok,
    TimedOut,
    Condition,
    predicate,
    expected,
    and_,
    or_,
    not_,
    stable_for,
    Waiter,
)
from .windows import BrowsingContext, ContextRegistry
from .dialogs import (
    DialogKind,
    NoDialog,
    DialogPresent,
    NO_DIALOG,
    ACCEPT,
    DISMISS,
    accept_with_text,
    DialogHandler,
)
from .actions import FailureKind, classify_selenium_error, retry_action, retry_action_async
from .decorators import retrying

__all__ = [
    "conditions",
    "BrowserSession",
    # Errors
    "BrowserSyncError",
    "WaitTimeoutError",
    "ConditionFailedError",
    "ContextNotFoundError",
    "ContextRestoreError",
    "NoDialogPresentError",
    "ActionFailedError",
    # Waiting
    "Pending",
    "Satisfied",
    "Failed",
    "WaitSpec",
    "Ok",
    "TimedOut",
    "Condition",
    "predicate",
    "expected",
    "and_",
    "or_",
    "not_",
    "stable_for",
    "Waiter",
    # Contexts
    "BrowsingContext",
    "ContextRegistry",
    # Dialogs
    "DialogKind",
    "NoDialog",
    "DialogPresent",
    "NO_DIALOG",
    "ACCEPT",
    "DISMISS",
    "accept_with_text",
    "DialogHandler",
    # Actions
    "FailureKind",
    "classify_selenium_error",
    "retry_action",
    "retry_action_async",
    "retrying",
]
