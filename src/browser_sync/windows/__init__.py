"""Browsing context (window/tab) coordination."""

from .registry import (
    BrowsingContext,
    ContextRegistry,
)

__all__ = [
    "BrowsingContext",
    "ContextRegistry",
]
