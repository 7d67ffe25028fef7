"""Conditions, combinators and the polling waiter."""

from .outcome import (
    Pending,
    Satisfied,
    Failed,
    Outcome,
    WaitSpec,
    Ok,
    TimedOut,
    WaitResult,
)

from .condition import (
    Condition,
    guarded,
    predicate,
    expected,
)

from .combinators import (
    and_,
    or_,
    not_,
    stable_for,
)

from .waiter import Waiter

__all__ = [
    # Outcomes
    "Pending",
    "Satisfied",
    "Failed",
    "Outcome",
    "WaitSpec",
    "Ok",
    "TimedOut",
    "WaitResult",
    # Conditions
    "Condition",
    "guarded",
    "predicate",
    "expected",
    # Combinators
    "and_",
    "or_",
    "not_",
    "stable_for",
    # Waiter
    "Waiter",
]
