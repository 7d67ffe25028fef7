# browser_sync/decorators/retrying.py
import inspect
import functools
from typing import Callable, Optional, Union

from ..actions.retry import Classifier, classify_selenium_error
from ..waiting.condition import Condition


__all__ = [
    "retrying",
]


def retrying(
    *,
    readiness: Union[Condition, Callable[..., Condition]],
    classify: Classifier = classify_selenium_error,
    timeout: Optional[float] = None,
    poll_interval: Optional[float] = None,
):
    """
    Decorator form of the bounded retry wrapper:
      - The decorated callable takes a BrowserSession as its first argument.
      - Works with both async and sync callables.
      - readiness is a Condition, or a callable receiving the same arguments as
        the decorated function and returning one (e.g. to wait on the element
        the call is about).
      - A transient failure gets one readiness wait and one retry; fatal
        failures propagate untouched.
    """

    def _condition(session, args, kwargs) -> Condition:
        if isinstance(readiness, Condition):
            return readiness
        return readiness(session, *args, **kwargs)

    def decorator(fn):
        if inspect.iscoroutinefunction(fn):
            @functools.wraps(fn)
            async def wrapper(session, *args, **kwargs):
                condition = _condition(session, args, kwargs)
                return await session.retry_async(
                    lambda: fn(session, *args, **kwargs),
                    condition,
                    classify,
                    timeout,
                    poll_interval,
                )
            return wrapper
        else:
            @functools.wraps(fn)
            def wrapper(session, *args, **kwargs):
                condition = _condition(session, args, kwargs)
                return session.retry(
                    lambda: fn(session, *args, **kwargs),
                    condition,
                    classify,
                    timeout,
                    poll_interval,
                )
            return wrapper
    return decorator
