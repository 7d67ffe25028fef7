"""Diagnostics and debugging information utility functions."""

import sys
import platform
from typing import Optional

import selenium
from selenium.common.exceptions import WebDriverException


def _read(fn, default: str = "<unavailable>") -> str:
    # An open dialog makes most driver reads fail; report that instead of raising.
    try:
        value = fn()
    except WebDriverException:
        return default
    return default if value is None else str(value)


def describe_session(driver, exc: Optional[BaseException] = None) -> str:
    """
    Collect diagnostic information about the driver state and environment.

    Args:
        driver: Selenium WebDriver instance (may be None)
        exc: Exception that occurred (can be None)

    Returns:
        str: Formatted diagnostic information
    """
    parts = [
        f"OS                : {platform.system()} {platform.release()}",
        f"Python            : {sys.version.split()[0]}",
        f"Selenium          : {getattr(selenium, '__version__', '?')}",
        f"Driver initialized: {driver is not None}",
    ]

    if driver is not None:
        handles = _read(lambda: len(driver.window_handles))
        parts += [
            f"Current URL       : {_read(lambda: driver.current_url)}",
            f"Title             : {_read(lambda: driver.title)}",
            f"Current context   : {_read(lambda: driver.current_window_handle)}",
            f"Open contexts     : {handles}",
        ]

    if exc:
        parts += [
            "---- ERROR ----",
            f"Error type        : {type(exc).__name__}",
            f"Error message     : {exc}",
        ]

    return "\n".join(parts)


__all__ = ['describe_session']
