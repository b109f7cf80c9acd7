import logging
from contextlib import AbstractContextManager
from typing import Any, Callable, Sequence

from step_runner.config.config import CatalogConfig, Config, DriverConfig
from step_runner.core.errors import ExecutionError
from step_runner.core.model.step import (
    Click,
    ClickFirst,
    ClickProductByPriceRange,
    Fill,
    Goto,
    ScrollToSelector,
    ScrollToText,
    Step,
    VerifyText,
    Wait,
    WaitForSelector,
)
from step_runner.core.price import parse_price
from step_runner.core.protocols.driver_protocol import DriverProtocol, ElementProtocol

logger = logging.getLogger(__name__)


def _as_text(value: Any) -> str:
    """Render a step value the way it would be typed into the page."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool) or value is None:
        raise ValueError(f"expected text or a number, got {value!r}")
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _as_search_text(value: Any) -> str:
    """Text searched for in the page. null and booleans are searched literally, as the browser would."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return _as_text(value)


def _as_selector(selector: Any) -> str:
    if not isinstance(selector, str):
        raise TypeError(f"selector must be a string, got {selector!r}")
    return selector


class Executor:
    """Runs validated steps one after another against a single driver."""

    def __init__(self, driver: DriverProtocol, driver_config: DriverConfig, catalog_config: CatalogConfig) -> None:
        self.driver = driver
        self.timeout = driver_config.element_timeout_ms
        self.catalog = catalog_config
        self._handlers: dict[type[Step], Callable[[Any], None]] = {
            Goto: self._goto,
            Click: self._click,
            ClickFirst: self._click_first,
            Fill: self._fill,
            Wait: self._wait,
            WaitForSelector: self._wait_for_selector,
            VerifyText: self._verify_text,
            ScrollToText: self._scroll_to_text,
            ScrollToSelector: self._scroll_to_selector,
            ClickProductByPriceRange: self._click_product_by_price_range,
        }

    def run(self, steps: Sequence[Step]) -> None:
        """Execute every step in order, raising ExecutionError on the first failure.

        Steps that already ran are not undone.
        """
        for index, step in enumerate(steps):
            logger.info(f"▶ Step {index + 1}: {step.to_dict()}")
            try:
                self._handlers[type(step)](step)
            except Exception as e:
                logger.error(f"❌ Execution failed at step: {step.to_dict()}")
                logger.error(f"Reason: {e}")
                raise ExecutionError(index, step, str(e)) from e

        logger.info("🎉 Flow completed successfully.")

    # --- Handlers ---
    def _goto(self, step: Goto) -> None:
        self.driver.navigate(_as_text(step.value))

    def _click(self, step: Click) -> None:
        selector = _as_selector(step.selector)
        self.driver.wait_for_selector(selector, self.timeout)
        self.driver.click(selector)

    def _click_first(self, step: ClickFirst) -> None:
        selector = _as_selector(step.selector)
        self.driver.wait_for_selector(selector, self.timeout)
        elements = self.driver.query_all(selector)
        if not elements:
            raise LookupError(f"No elements found for selector: {selector}")
        elements[0].click()

    def _fill(self, step: Fill) -> None:
        if step.value is None:
            raise ValueError("'fill' requires 'value'")
        text = _as_text(step.value)

        if isinstance(step.selector, str):
            self.driver.click(step.selector)
            self.driver.fill(step.selector, text)
            return

        target = self._visible_input_at(step.selector)
        target.click()
        target.fill(text)

    def _visible_input_at(self, position: Any) -> ElementProtocol:
        inputs = self.driver.visible_inputs()
        is_index = isinstance(position, int) or (isinstance(position, float) and position.is_integer())
        if isinstance(position, bool) or not is_index or not 0 <= position < len(inputs):
            raise LookupError(f"Input index {position} not found")
        return inputs[int(position)]

    def _wait(self, step: Wait) -> None:
        self.driver.sleep(step.value)

    def _wait_for_selector(self, step: WaitForSelector) -> None:
        self.driver.wait_for_selector(_as_selector(step.selector), self.timeout)

    def _verify_text(self, step: VerifyText) -> None:
        self.driver.wait_for_text(_as_search_text(step.value), self.timeout)

    def _scroll_to_text(self, step: ScrollToText) -> None:
        self.driver.scroll_to_text(_as_search_text(step.value))

    def _scroll_to_selector(self, step: ScrollToSelector) -> None:
        self.driver.scroll_to_selector(_as_selector(step.selector))

    def _click_product_by_price_range(self, step: ClickProductByPriceRange) -> None:
        for product in self.driver.query_all(self.catalog.product_selector):
            price_element = product.query(self.catalog.price_selector)
            if price_element is None:
                continue
            price = parse_price(price_element.inner_text())
            if price is None or not step.contains(price):
                continue
            link = product.query(self.catalog.link_selector)
            if link is None:
                logger.debug(f"Product priced {price} has no link, skipping")
                continue
            link.click()
            return

        raise LookupError(f"No product found in price range {step.min_price}-{step.max_price}")


def execute(
    steps: Sequence[Step],
    open_driver: Callable[[], AbstractContextManager[DriverProtocol]],
    config: Config,
) -> None:
    """Open one driver session, run the steps, and release the session on every exit path."""
    with open_driver() as driver:
        Executor(driver, config.driver_config, config.catalog_config).run(steps)
