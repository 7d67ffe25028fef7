# browser_sync/decorators/__init__.py
#
# Re-exports decorators from their respective modules.

from .retrying import retrying

__all__ = [
    "retrying",
]
