from unittest.mock import MagicMock

import pytest
from selenium.common.exceptions import StaleElementReferenceException, WebDriverException
from selenium.webdriver.common.by import By
from selenium.webdriver.remote.webelement import WebElement
from selenium.webdriver.support import expected_conditions as EC

from browser_sync import Failed, Pending, Satisfied, conditions, expected, predicate

from _utils import FakeDriver, FakeElement

SUBMIT = (By.ID, "submit")
ITEMS = (By.CSS_SELECTOR, ".inventory_item")


@pytest.fixture
def driver():
    return FakeDriver(url="https://shop.test/inventory.html", title="Swag Labs")


class TestElementConditions:
    def test_presence_pending_while_missing(self, driver):
        outcome = conditions.presence_of_element_located(SUBMIT).evaluate(driver)
        assert outcome == Pending("presence of id='submit'", "NoSuchElementException")

    def test_presence_satisfied_with_element(self, driver):
        el = driver.add_element(SUBMIT)
        assert conditions.presence_of_element_located(SUBMIT).evaluate(driver) == Satisfied(el)

    def test_presence_of_all(self, driver):
        cond = conditions.presence_of_all_elements_located(ITEMS)
        assert isinstance(cond.evaluate(driver), Pending)

        items = [FakeElement(), FakeElement()]
        driver.elements[ITEMS] = items
        assert cond.evaluate(driver) == Satisfied(items)

    def test_visibility_pending_while_hidden(self, driver):
        el = driver.add_element(SUBMIT, FakeElement(displayed=False))
        cond = conditions.visibility_of_element_located(SUBMIT)
        assert cond.evaluate(driver) == Pending(cond.name, "present but hidden")

        el.displayed = True
        assert cond.evaluate(driver) == Satisfied(el)

    def test_visibility_of_all_needs_every_match_visible(self, driver):
        driver.elements[ITEMS] = [FakeElement(), FakeElement(displayed=False)]
        cond = conditions.visibility_of_all_elements_located(ITEMS)
        assert isinstance(cond.evaluate(driver), Pending)

        driver.elements[ITEMS][1].displayed = True
        assert isinstance(cond.evaluate(driver), Satisfied)

    def test_stale_element_is_pending(self, driver):
        el = FakeElement()
        el.stale = True
        outcome = conditions.visibility_of(el).evaluate(driver)
        assert outcome == Pending("visibility of element", "StaleElementReferenceException")

    def test_clickable_reports_why_not(self, driver):
        el = driver.add_element(SUBMIT, FakeElement(displayed=False, enabled=False))
        cond = conditions.element_to_be_clickable(SUBMIT)
        assert cond.evaluate(driver).detail == "hidden"

        el.displayed = True
        assert cond.evaluate(driver).detail == "disabled"

        el.enabled = True
        assert cond.evaluate(driver) == Satisfied(el)

    def test_clickable_accepts_located_element(self, driver):
        el = FakeElement()
        assert conditions.element_to_be_clickable(el).evaluate(driver) == Satisfied(el)

    def test_invisibility_satisfied_when_missing_hidden_or_stale(self, driver):
        cond = conditions.invisibility_of_element_located(SUBMIT)
        assert cond.evaluate(driver) == Satisfied(True)

        el = driver.add_element(SUBMIT)
        assert isinstance(cond.evaluate(driver), Pending)

        el.stale = True
        assert cond.evaluate(driver) == Satisfied(True)

        el.stale = False
        el.displayed = False
        assert cond.evaluate(driver) == Satisfied(True)
        assert cond.boolean

    def test_invisibility_of_element(self, driver):
        el = MagicMock(spec=WebElement)
        el.is_displayed.return_value = True
        cond = conditions.invisibility_of(el)
        assert cond.evaluate(driver) == Pending("invisibility of element", "still visible")

        el.is_displayed.side_effect = StaleElementReferenceException("detached")
        assert cond.evaluate(driver) == Satisfied(True)
        assert driver.find_calls == 0

    def test_visibility_of_all_pending_without_matches(self, driver):
        cond = conditions.visibility_of_all_elements_located(ITEMS)
        assert cond.evaluate(driver) == Pending(cond.name, "0 matches, not all visible")

    def test_satisfied_element_conditions_carry_the_element(self, driver):
        el = driver.add_element(SUBMIT)
        assert conditions.visibility_of_element_located(SUBMIT).evaluate(driver) == Satisfied(el)
        assert not conditions.visibility_of_element_located(SUBMIT).boolean
        assert conditions.invisibility_of_element_located(SUBMIT).boolean

    def test_text_to_be_present(self, driver):
        el = driver.add_element((By.CLASS_NAME, "shopping_cart_badge"), FakeElement(text=""))
        cond = conditions.text_to_be_present_in_element((By.CLASS_NAME, "shopping_cart_badge"), "1")
        assert isinstance(cond.evaluate(driver), Pending)
        el.text = "1"
        assert cond.evaluate(driver) == Satisfied(True)

    def test_attribute_to_be(self, driver):
        el = driver.add_element(SUBMIT, FakeElement(attributes={"aria-busy": "true"}))
        cond = conditions.attribute_to_be(SUBMIT, "aria-busy", "false")
        assert cond.evaluate(driver) == Pending(cond.name, "is 'true'")
        el.attributes["aria-busy"] = "false"
        assert cond.evaluate(driver) == Satisfied(True)

    def test_number_of_elements_to_be_more_than(self, driver):
        cond = conditions.number_of_elements_to_be_more_than(ITEMS, 1)
        driver.elements[ITEMS] = [FakeElement()]
        assert cond.evaluate(driver) == Pending(cond.name, "1 found")
        driver.elements[ITEMS].append(FakeElement())
        assert isinstance(cond.evaluate(driver), Satisfied)

    def test_closed_window_fails(self, driver):
        driver.close()
        outcome = conditions.presence_of_element_located(SUBMIT).evaluate(driver)
        assert isinstance(outcome, Failed)
        assert outcome.reason == "browsing context closed"

    def test_other_driver_errors_propagate(self):
        driver = MagicMock()
        driver.find_element.side_effect = WebDriverException("invalid session id")
        with pytest.raises(WebDriverException):
            conditions.presence_of_element_located(SUBMIT).evaluate(driver)


class TestPageConditions:
    def test_url_conditions(self, driver):
        assert conditions.url_contains("/inventory").evaluate(driver) == Satisfied(True)
        assert conditions.url_to_be("https://shop.test/inventory.html").evaluate(driver) == Satisfied(True)
        assert conditions.url_matches(r"inventory\.html$").evaluate(driver) == Satisfied(True)

        pending = conditions.url_contains("/cart").evaluate(driver)
        assert pending == Pending("url contains '/cart'", "https://shop.test/inventory.html")

    def test_title_conditions(self, driver):
        assert conditions.title_is("Swag Labs").evaluate(driver) == Satisfied(True)
        assert conditions.title_contains("Swag").evaluate(driver) == Satisfied(True)
        assert conditions.title_is("Checkout").evaluate(driver) == Pending("title is 'Checkout'", "Swag Labs")

    def test_document_ready(self, driver):
        driver.ready_state = "loading"
        assert conditions.document_ready().evaluate(driver) == Pending("document ready (complete)", "loading")

        driver.ready_state = "interactive"
        assert conditions.document_ready(("interactive", "complete")).evaluate(driver) == Satisfied(True)

    def test_page_conditions_are_boolean(self):
        assert conditions.url_contains("x").boolean
        assert conditions.title_is("x").boolean
        assert not conditions.presence_of_element_located(SUBMIT).boolean


class TestAdapters:
    def test_predicate(self, driver):
        cond = predicate("two tabs", lambda d: len(d.window_handles) == 2)
        assert isinstance(cond.evaluate(driver), Pending)
        driver.open_window()
        assert cond.evaluate(driver) == Satisfied(True)

    def test_expected_wraps_selenium_expected_conditions(self, driver):
        cond = expected("title is Swag Labs", EC.title_is("Swag Labs"))
        assert cond.evaluate(driver) == Satisfied(True)

        missing = expected("submit present", EC.presence_of_element_located(SUBMIT))
        assert missing.evaluate(driver) == Pending("submit present", "NoSuchElementException")
