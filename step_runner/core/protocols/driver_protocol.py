from __future__ import annotations

from typing import Protocol


class ElementProtocol(Protocol):
    """A single element handle returned by the driver."""

    def click(self) -> None:
        """Click the element."""

    def fill(self, text: str) -> None:
        """Replace the element's text content with `text`."""

    def inner_text(self) -> str:
        """Return the element's rendered text."""

    def query(self, selector: str) -> ElementProtocol | None:
        """Return the first descendant matching `selector`, or None."""


class DriverProtocol(Protocol):
    """Browser capability surface consumed by the executor.

    The protocol intentionally exposes a very small surface so the core
    package does not depend on Playwright. The Playwright-based driver in
    `step_runner/driver_adapter/driver.py` implements it; tests use a fake.
    """

    def navigate(self, url: str) -> None:
        """Navigate to `url` and wait until the network is idle."""

    def wait_for_selector(self, selector: str, timeout: int) -> None:
        """Wait up to `timeout` milliseconds for `selector` to match. Raises on timeout."""

    def click(self, selector: str) -> None:
        """Click the element matching `selector`."""

    def query_all(self, selector: str) -> list[ElementProtocol]:
        """Return every element currently matching `selector`."""

    def fill(self, selector: str, text: str) -> None:
        """Set the text of the element matching `selector`."""

    def visible_inputs(self) -> list[ElementProtocol]:
        """Return the visible input elements in document order."""

    def sleep(self, milliseconds: float) -> None:
        """Pause without touching the DOM."""

    def wait_for_text(self, text: str, timeout: int) -> None:
        """Poll until the page body text contains `text`. Raises on timeout."""

    def scroll_to_text(self, text: str) -> None:
        """Scroll the first element whose text contains `text` into view, if any."""

    def scroll_to_selector(self, selector: str) -> None:
        """Scroll the element matching `selector` into view, if any."""

    def stop(self) -> None:
        """Stop the driver and close the browser."""
