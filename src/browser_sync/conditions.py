"""
Primitive conditions.

The page-state checks end-to-end suites wait on, expressed as Conditions.
Most wrap Selenium's own expected_conditions through expected(); the few that
Selenium does not ship are written out here. Element targets are Selenium
locator tuples, e.g. (By.ID, "submit"), or an already located WebElement where
noted.

A missing or stale element is Pending, a closed window is Failed, and any
other driver error propagates to the caller of wait().
"""

from typing import Iterable, Tuple, Union

from selenium.webdriver.remote.webelement import WebElement
from selenium.webdriver.support import expected_conditions as EC

from .waiting.condition import Condition, expected, guarded, predicate
from .waiting.outcome import Outcome, Pending, Satisfied

Locator = Tuple[str, str]
Target = Union[Locator, WebElement]


def _describe(target) -> str:
    if isinstance(target, tuple) and len(target) == 2:
        by, value = target
        return f"{by}={value!r}"
    return "element"


def _resolve(driver, target):
    """Find the element for a locator tuple; pass located elements through."""
    if isinstance(target, tuple):
        return driver.find_element(*target)
    return target


def _condition(name: str, check, *, boolean: bool = False) -> Condition:
    def evaluate(driver) -> Outcome:
        return guarded(name, check, driver)

    return Condition(name, evaluate, boolean=boolean)


def _current_url(driver) -> str:
    return driver.current_url


def _title(driver) -> str:
    return driver.title


# ============================================================================
# Elements
# ============================================================================

def presence_of_element_located(locator: Locator) -> Condition:
    """Satisfied with the element once it is attached to the DOM."""
    return expected(f"presence of {_describe(locator)}", EC.presence_of_element_located(locator))


def presence_of_all_elements_located(locator: Locator) -> Condition:
    """Satisfied with the list of matches once there is at least one."""
    return expected(
        f"presence of all {_describe(locator)}",
        EC.presence_of_all_elements_located(locator),
        detail=lambda d: "no matches",
    )


def visibility_of_element_located(locator: Locator) -> Condition:
    return expected(
        f"visibility of {_describe(locator)}",
        EC.visibility_of_element_located(locator),
        detail=lambda d: "present but hidden",
    )


def visibility_of_all_elements_located(locator: Locator) -> Condition:
    return expected(
        f"visibility of all {_describe(locator)}",
        EC.visibility_of_all_elements_located(locator),
        detail=lambda d: f"{len(d.find_elements(*locator))} matches, not all visible",
    )


def visibility_of(element: WebElement) -> Condition:
    return expected("visibility of element", EC.visibility_of(element), detail=lambda d: "hidden")


def invisibility_of_element_located(locator: Locator) -> Condition:
    """Satisfied once the element is hidden or gone from the DOM."""
    return expected(
        f"invisibility of {_describe(locator)}",
        EC.invisibility_of_element_located(locator),
        boolean=True,
        detail=lambda d: "still visible",
    )


def invisibility_of(element: WebElement) -> Condition:
    """Satisfied once the element is hidden or detached."""
    return expected(
        "invisibility of element",
        EC.invisibility_of_element(element),
        boolean=True,
        detail=lambda d: "still visible",
    )


def element_to_be_clickable(target: Target) -> Condition:
    """
    Satisfied with the element once it is displayed and enabled.

    Written out instead of wrapping EC.element_to_be_clickable so a timeout
    says whether the element stayed hidden or disabled.
    """
    name = f"{_describe(target)} clickable"

    def check(d):
        el = _resolve(d, target)
        if not el.is_displayed():
            return Pending(name, "hidden")
        if not el.is_enabled():
            return Pending(name, "disabled")
        return Satisfied(el)

    return _condition(name, check)


def text_to_be_present_in_element(locator: Locator, text: str) -> Condition:
    return expected(
        f"text {text!r} in {_describe(locator)}",
        EC.text_to_be_present_in_element(locator, text),
        boolean=True,
    )


def attribute_to_be(target: Target, attribute: str, value: str) -> Condition:
    name = f"{_describe(target)} @{attribute} == {value!r}"

    def check(d):
        actual = _resolve(d, target).get_attribute(attribute)
        return Satisfied(True) if actual == value else Pending(name, f"is {actual!r}")

    return _condition(name, check, boolean=True)


def number_of_elements_to_be_more_than(locator: Locator, count: int) -> Condition:
    name = f"more than {count} of {_describe(locator)}"

    def check(d):
        elements = d.find_elements(*locator)
        if len(elements) > count:
            return Satisfied(elements)
        return Pending(name, f"{len(elements)} found")

    return _condition(name, check)


# ============================================================================
# Page
# ============================================================================

def url_contains(fragment: str) -> Condition:
    return expected(f"url contains {fragment!r}", EC.url_contains(fragment), boolean=True, detail=_current_url)


def url_to_be(url: str) -> Condition:
    return expected(f"url is {url!r}", EC.url_to_be(url), boolean=True, detail=_current_url)


def url_matches(pattern: str) -> Condition:
    """Satisfied once re.search(pattern, current_url) matches."""
    return expected(f"url matches {pattern!r}", EC.url_matches(pattern), boolean=True, detail=_current_url)


def title_contains(fragment: str) -> Condition:
    return expected(f"title contains {fragment!r}", EC.title_contains(fragment), boolean=True, detail=_title)


def title_is(title: str) -> Condition:
    return expected(f"title is {title!r}", EC.title_is(title), boolean=True, detail=_title)


def document_ready(states: Iterable[str] = ("complete",)) -> Condition:
    """Satisfied once document.readyState is one of `states`."""
    accepted = tuple(states)
    name = f"document ready ({'/'.join(accepted)})"

    def check(d):
        state = d.execute_script("return document.readyState")
        return Satisfied(True) if state in accepted else Pending(name, state)

    return _condition(name, check, boolean=True)


__all__ = [
    "Locator",
    "predicate",
    "expected",
    "presence_of_element_located",
    "presence_of_all_elements_located",
    "visibility_of_element_located",
    "visibility_of_all_elements_located",
    "visibility_of",
    "invisibility_of_element_located",
    "invisibility_of",
    "element_to_be_clickable",
    "text_to_be_present_in_element",
    "attribute_to_be",
    "number_of_elements_to_be_more_than",
    "url_contains",
    "url_to_be",
    "url_matches",
    "title_contains",
    "title_is",
    "document_ready",
]
