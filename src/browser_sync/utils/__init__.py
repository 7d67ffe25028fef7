"""Utility functions."""

from .diagnostics import describe_session

__all__ = ["describe_session"]
