"""Compound conditions built from primitive ones."""

from typing import List

from .condition import Condition, Evaluator
from .outcome import Failed, Outcome, Pending, Satisfied


def _joined(conditions, sep: str) -> str:
    return "(" + f" {sep} ".join(c.name for c in conditions) + ")"


def _evaluators(conditions) -> List[Evaluator]:
    return [c.evaluator() for c in conditions]


def and_(first: Condition, second: Condition, *more: Condition) -> Condition:
    """
    Satisfied only when every condition is satisfied on the same poll.

    The satisfied value is the tuple of the children's values. Any Failed child
    fails the whole; otherwise the first pending child's outcome is reported.
    """
    conditions = (first, second) + more
    name = _joined(conditions, "and")

    def factory() -> Evaluator:
        evaluators = _evaluators(conditions)

        def evaluate(driver) -> Outcome:
            outcomes = [ev(driver) for ev in evaluators]
            for outcome in outcomes:
                if isinstance(outcome, Failed):
                    return outcome
            for outcome in outcomes:
                if isinstance(outcome, Pending):
                    return outcome
            return Satisfied(tuple(o.value for o in outcomes))

        return evaluate

    return Condition(name, evaluator_factory=factory, boolean=all(c.boolean for c in conditions))


def or_(first: Condition, second: Condition, *more: Condition) -> Condition:
    """
    Satisfied with the first satisfied condition, in argument order.

    Failed only once every condition has failed.
    """
    conditions = (first, second) + more
    name = _joined(conditions, "or")

    def factory() -> Evaluator:
        evaluators = _evaluators(conditions)

        def evaluate(driver) -> Outcome:
            outcomes = [ev(driver) for ev in evaluators]
            for outcome in outcomes:
                if isinstance(outcome, Satisfied):
                    return outcome
            if all(isinstance(o, Failed) for o in outcomes):
                return Failed("; ".join(str(o) for o in outcomes), name)
            return Pending(name, "; ".join(str(o) for o in outcomes if isinstance(o, Pending)))

        return evaluate

    return Condition(name, evaluator_factory=factory, boolean=all(c.boolean for c in conditions))


def not_(condition: Condition) -> Condition:
    """
    Invert a boolean condition: satisfied while the inner one is pending.

    Failed passes through unchanged. Conditions carrying a payload (elements,
    handles) have no meaningful inverse and are rejected.
    """
    if not condition.boolean:
        raise TypeError(
            f"not_() needs a boolean condition; {condition.name} carries a value"
        )
    name = f"not {condition.name}"

    def factory() -> Evaluator:
        inner = condition.evaluator()

        def evaluate(driver) -> Outcome:
            outcome = inner(driver)
            if isinstance(outcome, Failed):
                return outcome
            if isinstance(outcome, Satisfied):
                return Pending(name, f"{condition.name} still holds")
            return Satisfied(True)

        return evaluate

    return Condition(name, evaluator_factory=factory, boolean=True)


def stable_for(condition: Condition, polls: int) -> Condition:
    """
    Satisfied only after `polls` consecutive satisfied polls.

    Guards against flicker, e.g. an element that appears and detaches again
    during a page transition. A pending poll resets the count.
    """
    if polls < 1:
        raise ValueError(f"stable_for needs at least one poll, got {polls}")
    name = f"{condition.name} stable for {polls} polls"

    def factory() -> Evaluator:
        inner = condition.evaluator()
        streak = 0

        def evaluate(driver) -> Outcome:
            nonlocal streak
            outcome = inner(driver)
            if isinstance(outcome, Failed):
                return outcome
            if isinstance(outcome, Pending):
                streak = 0
                return Pending(name, str(outcome))
            streak += 1
            if streak >= polls:
                return outcome
            return Pending(name, f"stable {streak}/{polls}")

        return evaluate

    return Condition(name, evaluator_factory=factory, boolean=condition.boolean)


__all__ = [
    "and_",
    "or_",
    "not_",
    "stable_for",
]
