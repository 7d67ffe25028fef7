"""Element finding and interaction through the waiter and the retry wrapper."""

from typing import Optional

from selenium.webdriver.common.by import By

from ..conditions import (
    Locator,
    element_to_be_clickable,
    presence_of_element_located,
    visibility_of_element_located,
)


def get_by_selector(selector_type: str):
    return {
        'css': By.CSS_SELECTOR,
        'xpath': By.XPATH,
        'id': By.ID,
        'name': By.NAME,
        'tag': By.TAG_NAME,
        'class': By.CLASS_NAME,
        'link_text': By.LINK_TEXT,
        'partial_link_text': By.PARTIAL_LINK_TEXT
    }.get(selector_type.lower())


def locator(selector: str, selector_type: str = "css") -> Locator:
    """Build a Selenium locator tuple from a selector and its type name."""
    by = get_by_selector(selector_type)
    if not by:
        raise ValueError(f"Unsupported selector type: {selector_type}")
    return (by, selector)


def find_element(
    session,
    selector: str,
    selector_type: str = "css",
    visible_only: bool = False,
    timeout: Optional[float] = None,
):
    """
    Wait for an element and return it.

    Raises WaitTimeoutError if it does not show up within the timeout.
    """
    loc = locator(selector, selector_type)
    if visible_only:
        condition = visibility_of_element_located(loc)
    else:
        condition = presence_of_element_located(loc)
    return session.wait(condition, timeout=timeout).unwrap()


def click_element(
    session,
    selector: str,
    selector_type: str = "css",
    timeout: Optional[float] = None,
    force_js: bool = False,
):
    """
    Click an element once it is clickable.

    A stale, not-yet-interactable or overlaid element gets one more attempt
    after it is clickable again. force_js clicks through JavaScript, for
    elements the native click cannot reach.
    """
    clickable = element_to_be_clickable(locator(selector, selector_type))

    def _click():
        el = session.wait(clickable, timeout=timeout).unwrap()
        if force_js:
            session.driver.execute_script("arguments[0].click();", el)
        else:
            el.click()
        return el

    return session.retry(_click, clickable)


def fill_text(
    session,
    selector: str,
    text: str,
    selector_type: str = "css",
    clear_first: bool = True,
    timeout: Optional[float] = None,
):
    """Type text into a visible element, clearing it first by default."""
    visible = visibility_of_element_located(locator(selector, selector_type))

    def _fill():
        el = session.wait(visible, timeout=timeout).unwrap()
        if clear_first:
            el.clear()
        el.send_keys(text)
        return el

    return session.retry(_fill, visible)


__all__ = [
    'get_by_selector',
    'locator',
    'find_element',
    'click_element',
    'fill_text',
]
