"""The Condition type and helpers for building conditions from plain callables."""

from typing import Any, Callable, Optional

from selenium.common.exceptions import (
    NoSuchElementException,
    NoSuchWindowException,
    StaleElementReferenceException,
)

from .outcome import Failed, Outcome, Pending, Satisfied

Evaluator = Callable[[Any], Outcome]


class Condition:
    """
    A named predicate over a driver, evaluated repeatedly by the Waiter.

    A Condition never changes after construction. Conditions that need memory
    across polls (stable_for) pass an evaluator_factory instead of evaluate; the
    Waiter calls evaluator() once per wait, so every wait starts from fresh state
    and the Condition itself stays reusable.

    Args:
        name: Human-readable name used in logs and timeout messages
        evaluate: Stateless evaluator, driver -> Outcome
        evaluator_factory: Zero-argument callable returning a fresh evaluator
        boolean: True when a satisfied outcome carries no payload beyond True
    """

    def __init__(
        self,
        name: str,
        evaluate: Optional[Evaluator] = None,
        *,
        evaluator_factory: Optional[Callable[[], Evaluator]] = None,
        boolean: bool = False,
    ):
        if (evaluate is None) == (evaluator_factory is None):
            raise ValueError("Condition needs exactly one of evaluate or evaluator_factory")
        self._name = name
        self._evaluate = evaluate
        self._evaluator_factory = evaluator_factory
        self._boolean = boolean

    @property
    def name(self) -> str:
        return self._name

    @property
    def boolean(self) -> bool:
        return self._boolean

    def evaluator(self) -> Evaluator:
        """Return an evaluator to be used for the polls of a single wait."""
        if self._evaluator_factory is not None:
            return self._evaluator_factory()
        return self._evaluate

    def evaluate(self, driver) -> Outcome:
        """One-shot evaluation with fresh per-wait state."""
        return self.evaluator()(driver)

    __call__ = evaluate

    def __and__(self, other: "Condition") -> "Condition":
        from .combinators import and_
        return and_(self, other)

    def __or__(self, other: "Condition") -> "Condition":
        from .combinators import or_
        return or_(self, other)

    def __invert__(self) -> "Condition":
        from .combinators import not_
        return not_(self)

    def __repr__(self) -> str:
        return f"Condition({self._name!r})"


def guarded(name: str, fn: Callable[[Any], Outcome], driver) -> Outcome:
    """
    Run fn(driver), mapping the driver's "not yet" errors to Pending.

    A missing or stale element means the page has not settled. A closed window
    can never come back, so it ends the wait. Everything else propagates.
    """
    try:
        return fn(driver)
    except (NoSuchElementException, StaleElementReferenceException) as e:
        return Pending(name, type(e).__name__)
    except NoSuchWindowException:
        return Failed("browsing context closed", name)


def predicate(name: str, fn: Callable[[Any], Any]) -> Condition:
    """Boolean condition: satisfied whenever fn(driver) is truthy."""

    def _evaluate(driver) -> Outcome:
        return guarded(name, lambda d: Satisfied(True) if fn(d) else Pending(name), driver)

    return Condition(name, _evaluate, boolean=True)


def expected(
    name: str,
    fn: Callable[[Any], Any],
    *,
    boolean: bool = False,
    detail: Optional[Callable[[Any], str]] = None,
) -> Condition:
    """
    Adapt a Selenium-style expected condition (falsy until it returns a value).

    Works with the callables from selenium.webdriver.support.expected_conditions,
    e.g. expected("title is Home", EC.title_is("Home")).

    Args:
        name: Condition name
        fn: Callable driver -> value, falsy while the state is not reached
        boolean: Report Satisfied(True) instead of the returned value
        detail: Optional callable driver -> str describing a pending poll
    """

    def _evaluate(driver) -> Outcome:
        def _check(d):
            result = fn(d)
            if not result:
                return Pending(name, detail(d) if detail else None)
            return Satisfied(True if boolean else result)

        return guarded(name, _check, driver)

    return Condition(name, _evaluate, boolean=boolean)


__all__ = [
    "Condition",
    "Evaluator",
    "guarded",
    "predicate",
    "expected",
]
