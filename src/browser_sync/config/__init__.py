"""Configuration management for browser synchronization."""

from .environment import (
    get_env_config,
    merge_config,
)

__all__ = [
    "get_env_config",
    "merge_config",
]
