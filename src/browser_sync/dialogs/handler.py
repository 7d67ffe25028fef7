"""Detection and resolution of native alert/confirm/prompt dialogs."""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Union

from selenium.common.exceptions import NoAlertPresentException

from ..exceptions import NoDialogPresentError
from ..waiting.condition import Condition, guarded
from ..waiting.outcome import Outcome, Pending, Satisfied, WaitResult
from ..waiting.waiter import Waiter

import logging
logger = logging.getLogger(__name__)


class DialogKind(str, Enum):
    ALERT = "alert"
    CONFIRM = "confirm"
    PROMPT = "prompt"
    # Classic WebDriver reports the text of a dialog but not its type.
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class NoDialog:
    pass


@dataclass(frozen=True)
class DialogPresent:
    kind: DialogKind
    text: str


DialogState = Union[NoDialog, DialogPresent]

NO_DIALOG = NoDialog()


@dataclass(frozen=True)
class DialogResolution:
    """How to close a dialog: accept, dismiss, or type text then accept."""

    action: str
    text: Optional[str] = None


ACCEPT = DialogResolution("accept")
DISMISS = DialogResolution("dismiss")


def accept_with_text(text: str) -> DialogResolution:
    return DialogResolution("accept", text)


class DialogHandler:
    """
    Poll for and resolve the dialog of one session.

    An open dialog blocks every other command of the real driver, so it is
    modelled as its own condition instead of a try/except around each action.
    resolve() never waits: call wait_for_dialog() first when the dialog shows
    up asynchronously.

    Args:
        driver: Selenium WebDriver (or compatible)
        waiter: Waiter used by wait_for_dialog (a new one if None)
        kind_of: Optional callable driver -> DialogKind, or its value such as
            "prompt", for drivers that can tell the dialog type; without it
            the kind is UNKNOWN
    """

    def __init__(
        self,
        driver,
        waiter: Optional[Waiter] = None,
        kind_of: Optional[Callable[[object], Union[DialogKind, str]]] = None,
    ):
        self.driver = driver
        self.waiter = waiter if waiter is not None else Waiter(driver)
        self._kind_of = kind_of

    def poll_dialog(self) -> DialogState:
        """Non-blocking snapshot of the dialog state."""
        try:
            alert = self.driver.switch_to.alert
            text = alert.text
        except NoAlertPresentException:
            return NO_DIALOG
        kind = DialogKind(self._kind_of(self.driver)) if self._kind_of else DialogKind.UNKNOWN
        return DialogPresent(kind, text or "")

    def dialog_present(self) -> Condition:
        """Satisfied with the DialogPresent state once a dialog is open."""
        name = "dialog present"

        def evaluate(driver) -> Outcome:
            def check(_d):
                state = self.poll_dialog()
                return Satisfied(state) if isinstance(state, DialogPresent) else Pending(name)

            return guarded(name, check, driver)

        return Condition(name, evaluate)

    def wait_for_dialog(
        self,
        timeout: Optional[float] = None,
        poll_interval: Optional[float] = None,
    ) -> WaitResult:
        return self.waiter.until(self.dialog_present(), timeout, poll_interval)

    def resolve(self, resolution: DialogResolution = ACCEPT) -> DialogPresent:
        """
        Close the open dialog and return the state it was in.

        Raises NoDialogPresentError when no dialog is outstanding, including when
        the dialog disappears between the check and the action.
        """
        if resolution.action not in ("accept", "dismiss"):
            raise ValueError(f"Unknown dialog action: {resolution.action}")

        state = self.poll_dialog()
        if not isinstance(state, DialogPresent):
            raise NoDialogPresentError(f"Cannot {resolution.action}: no dialog is open")

        try:
            alert = self.driver.switch_to.alert
            if resolution.text is not None:
                alert.send_keys(resolution.text)
            if resolution.action == "accept":
                alert.accept()
            else:
                alert.dismiss()
        except NoAlertPresentException as e:
            raise NoDialogPresentError(f"Dialog closed before it could be resolved: {e}") from e

        logger.debug(f"Resolved {state.kind.value} dialog ({resolution.action}): {state.text!r}")
        return state


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
