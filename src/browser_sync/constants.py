"""
Global constants and configuration defaults.
No dependencies - safe to import from anywhere.

Environment overrides are resolved in config/environment.py; the values here
are what a session uses when nothing is configured.
"""

import os

# ============================================================================
# Wait Configuration
# ============================================================================

DEFAULT_TIMEOUT_SECS = 10.0
"""Default upper bound for a single wait, in seconds."""

DEFAULT_POLL_INTERVAL_SECS = 0.5
"""Default delay between two polls of a condition, in seconds."""


# ============================================================================
# Retry Configuration
# ============================================================================

DEFAULT_RETRY_TIMEOUT_SECS = 5.0
"""How long the readiness wait before a retried action may take, in seconds."""


# ============================================================================
# Environment Variable Names
# ============================================================================

ENV_TIMEOUT = "BROWSER_SYNC_TIMEOUT"
ENV_POLL_INTERVAL = "BROWSER_SYNC_POLL_INTERVAL"
ENV_RETRY_TIMEOUT = "BROWSER_SYNC_RETRY_TIMEOUT"


# ============================================================================
# Feature Flags
# ============================================================================

LOG_POLLS = os.getenv("BROWSER_SYNC_LOG_POLLS", "0") == "1"
"""Emit a debug line for every single poll, not only for the final outcome."""


__all__ = [
    "DEFAULT_TIMEOUT_SECS",
    "DEFAULT_POLL_INTERVAL_SECS",
    "DEFAULT_RETRY_TIMEOUT_SECS",
    "ENV_TIMEOUT",
    "ENV_POLL_INTERVAL",
    "ENV_RETRY_TIMEOUT",
    "LOG_POLLS",
]
