"""Native dialog handling."""

from .handler import (
    DialogKind,
    NoDialog,
    DialogPresent,
    DialogState,
    NO_DIALOG,
    DialogResolution,
    ACCEPT,
    DISMISS,
    accept_with_text,
    DialogHandler,
)

__all__ = [
    "DialogKind",
    "NoDialog",
    "DialogPresent",
    "DialogState",
    "NO_DIALOG",
    "DialogResolution",
    "ACCEPT",
    "DISMISS",
    "accept_with_text",
    "DialogHandler",
]
