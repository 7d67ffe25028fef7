"""Environment configuration and validation."""

import os
from typing import Optional

from dotenv import load_dotenv

from ..constants import (
    DEFAULT_TIMEOUT_SECS,
    DEFAULT_POLL_INTERVAL_SECS,
    DEFAULT_RETRY_TIMEOUT_SECS,
    ENV_TIMEOUT,
    ENV_POLL_INTERVAL,
    ENV_RETRY_TIMEOUT,
)

import logging
logger = logging.getLogger(__name__)

load_dotenv()


# Zero is allowed for budgets (a single evaluation) but not for the poll interval.
_ALLOW_ZERO = {
    "timeout": True,
    "poll_interval": False,
    "retry_timeout": True,
}


def _check_seconds(name: str, value, *, allow_zero: bool) -> float:
    """Validate a duration in seconds, raising ValueError that names the setting."""
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be a number of seconds, got {value!r}.")

    if seconds < 0 or (seconds == 0 and not allow_zero):
        bound = "non-negative" if allow_zero else "positive"
        raise ValueError(f"{name} must be {bound}, got {value!r}.")
    return seconds


def _read_seconds(name: str, default: float, *, allow_zero: bool) -> float:
    """Read a duration in seconds from the environment, falling back to default."""
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default

    try:
        return _check_seconds(name, raw, allow_zero=allow_zero)
    except ValueError as e:
        raise EnvironmentError(str(e)) from e


def get_env_config() -> dict:
    """
    Read environment variables and validate them.

    Optional:   BROWSER_SYNC_TIMEOUT        (default 10 seconds)
                BROWSER_SYNC_POLL_INTERVAL  (default 0.5 seconds, must be > 0)
                BROWSER_SYNC_RETRY_TIMEOUT  (default 5 seconds)

    A `.env` file in the working directory is honoured. A poll interval that is
    larger than the timeout is accepted; such waits evaluate their condition once.
    """
    timeout = _read_seconds(ENV_TIMEOUT, DEFAULT_TIMEOUT_SECS, allow_zero=True)
    poll_interval = _read_seconds(ENV_POLL_INTERVAL, DEFAULT_POLL_INTERVAL_SECS, allow_zero=False)
    retry_timeout = _read_seconds(ENV_RETRY_TIMEOUT, DEFAULT_RETRY_TIMEOUT_SECS, allow_zero=True)

    if poll_interval > timeout:
        logger.debug(
            f"Configured poll interval {poll_interval}s exceeds timeout {timeout}s; "
            f"default waits will evaluate once"
        )

    return {
        "timeout": timeout,
        "poll_interval": poll_interval,
        "retry_timeout": retry_timeout,
    }


def merge_config(overrides: Optional[dict] = None) -> dict:
    """
    Environment config with explicit overrides applied on top (None values ignored).

    Overrides are validated with the same rules as the environment, so a bad
    value fails here instead of on the first wait.

    Raises:
        KeyError: Unknown configuration key
        ValueError: Override that is not a valid duration
        EnvironmentError: Invalid environment variable
    """
    config = get_env_config()
    for key, value in (overrides or {}).items():
        if key not in config:
            raise KeyError(f"Unknown configuration key: {key}")
        if value is not None:
            config[key] = _check_seconds(key, value, allow_zero=_ALLOW_ZERO[key])
    return config
