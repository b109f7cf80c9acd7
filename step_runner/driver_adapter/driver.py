import logging
from contextlib import contextmanager
from typing import Iterator

from playwright.sync_api import ElementHandle, Error as PlaywrightError, Playwright, sync_playwright

from step_runner.config.config import DriverConfig

logger = logging.getLogger(__name__)

_SCROLL_TO_TEXT_JS = """(text) => {
    const el = [...document.querySelectorAll('*')].find(e => e.innerText && e.innerText.includes(text));
    if (el) el.scrollIntoView({ behavior: 'smooth', block: 'center' });
}"""

_SCROLL_TO_SELECTOR_JS = """(selector) => {
    const el = document.querySelector(selector);
    if (el) el.scrollIntoView({ behavior: 'smooth', block: 'center' });
}"""

_BODY_CONTAINS_TEXT_JS = "(text) => document.body.innerText.includes(text)"


class Element:
    """ElementProtocol implementation over a Playwright element handle."""

    def __init__(self, handle: ElementHandle) -> None:
        self.handle = handle

    def click(self) -> None:
        self.handle.click()

    def fill(self, text: str) -> None:
        self.handle.fill(text)

    def inner_text(self) -> str:
        return self.handle.inner_text()

    def query(self, selector: str) -> "Element | None":
        found = self.handle.query_selector(selector)
        return Element(found) if found is not None else None


class Driver:
    def __init__(self, playwright: Playwright, driver_config: DriverConfig):
        self.playwright = playwright
        self.config = driver_config
        browser_type = getattr(self.playwright, self.config.browser)
        self.browser = browser_type.launch(headless=self.config.headless, slow_mo=self.config.slow_mo_ms)
        self.page = self.browser.new_page()
        self._stopped = False
        logger.debug(f"Launched {self.config.browser} (headless={self.config.headless})")

    def stop(self) -> None:
        if self._stopped:
            return
        self._stopped = True
        try:
            self.browser.close()
        except PlaywrightError as e:
            # The browser may already be gone, e.g. the user closed the window.
            logger.debug(f"Browser close failed: {e}")

    def navigate(self, url: str) -> None:
        """Navigate to an absolute URL and wait for the network to go idle."""
        logger.debug(f"Navigating to: {url}")
        self.page.goto(url, wait_until='networkidle')

    def wait_for_selector(self, selector: str, timeout: int) -> None:
        self.page.wait_for_selector(selector, timeout=timeout)

    def click(self, selector: str) -> None:
        self.page.click(selector)

    def query_all(self, selector: str) -> list[Element]:
        return [Element(handle) for handle in self.page.query_selector_all(selector)]

    def fill(self, selector: str, text: str) -> None:
        self.page.fill(selector, text)

    def visible_inputs(self) -> list[Element]:
        return [Element(handle) for handle in self.page.locator(self.config.input_selector).element_handles()]

    def sleep(self, milliseconds: float) -> None:
        self.page.wait_for_timeout(milliseconds)

    def wait_for_text(self, text: str, timeout: int) -> None:
        self.page.wait_for_function(_BODY_CONTAINS_TEXT_JS, arg=text, timeout=timeout)

    def scroll_to_text(self, text: str) -> None:
        self.page.evaluate(_SCROLL_TO_TEXT_JS, text)

    def scroll_to_selector(self, selector: str) -> None:
        self.page.evaluate(_SCROLL_TO_SELECTOR_JS, selector)


@contextmanager
def open_driver(driver_config: DriverConfig) -> Iterator[Driver]:
    """Start Playwright and a browser; close both however the block exits."""
    with sync_playwright() as playwright:
        driver = Driver(playwright=playwright, driver_config=driver_config)
        try:
            yield driver
        finally:
            driver.stop()
