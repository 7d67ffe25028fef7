"""Outcome and result types exchanged between conditions, the waiter and callers."""

from dataclasses import dataclass
from typing import Any, Optional, Union

from ..exceptions import ConditionFailedError, WaitTimeoutError


@dataclass(frozen=True)
class Pending:
    """Not satisfied yet; worth polling again."""

    condition: str = ""
    detail: Optional[str] = None

    def __str__(self) -> str:
        text = f"pending: {self.condition}" if self.condition else "pending"
        return f"{text} ({self.detail})" if self.detail else text


@dataclass(frozen=True)
class Satisfied:
    value: Any = True


@dataclass(frozen=True)
class Failed:
    """Terminal outcome; the waiter stops polling."""

    reason: str
    condition: str = ""

    def __str__(self) -> str:
        return f"failed: {self.condition}: {self.reason}" if self.condition else f"failed: {self.reason}"


Outcome = Union[Pending, Satisfied, Failed]


@dataclass(frozen=True)
class WaitSpec:
    """
    What to wait for and for how long.

    Attributes:
        condition: The Condition to poll
        timeout: Upper bound in seconds (0 means evaluate exactly once)
        poll_interval: Delay between polls in seconds, must be > 0
    """

    condition: Any
    timeout: float
    poll_interval: float

    def __post_init__(self):
        if self.poll_interval <= 0:
            raise ValueError(f"poll_interval must be > 0, got {self.poll_interval}")
        if self.timeout < 0:
            raise ValueError(f"timeout must be >= 0, got {self.timeout}")


@dataclass(frozen=True)
class Ok:
    value: Any
    elapsed: float
    polls: int = 1

    ok = True

    def unwrap(self) -> Any:
        return self.value


@dataclass(frozen=True)
class TimedOut:
    """
    The wait ended without the condition being satisfied.

    last_outcome is the final Pending, or the Failed outcome that ended the wait
    early.
    """

    condition_name: str
    last_outcome: Outcome
    elapsed: float
    polls: int = 1

    ok = False

    @property
    def failed(self) -> bool:
        """True when the wait stopped on a terminal Failed outcome."""
        return isinstance(self.last_outcome, Failed)

    def to_exception(self) -> Exception:
        if isinstance(self.last_outcome, Failed):
            return ConditionFailedError(self.condition_name, self.last_outcome.reason, self.elapsed)
        return WaitTimeoutError(self.condition_name, self.elapsed, self.last_outcome)

    def unwrap(self):
        raise self.to_exception()

    def __str__(self) -> str:
        return f"{self.condition_name} timed out after {self.elapsed:.3f}s ({self.last_outcome})"


WaitResult = Union[Ok, TimedOut]


__all__ = [
    "Pending",
    "Satisfied",
    "Failed",
    "Outcome",
    "WaitSpec",
    "Ok",
    "TimedOut",
    "WaitResult",
]
