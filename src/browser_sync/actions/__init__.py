"""Browser actions and the bounded retry wrapper."""

from .retry import (
    FailureKind,
    TRANSIENT_EXCEPTIONS,
    classify_selenium_error,
    retry_action,
    retry_action_async,
)

from .elements import (
    get_by_selector,
    locator,
    find_element,
    click_element,
    fill_text,
)

__all__ = [
    # Retry
    "FailureKind",
    "TRANSIENT_EXCEPTIONS",
    "classify_selenium_error",
    "retry_action",
    "retry_action_async",
    # Elements
    "get_by_selector",
    "locator",
    "find_element",
    "click_element",
    "fill_text",
]
