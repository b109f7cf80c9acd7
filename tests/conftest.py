from contextlib import contextmanager
from typing import Iterator

import pytest

from step_runner.config.config import Config
from step_runner.core.protocols.driver_protocol import DriverProtocol


class FakeElement:
    def __init__(self, text: str = "", children: dict[str, "FakeElement"] | None = None, name: str = "") -> None:
        self.text = text
        self.children = children or {}
        self.name = name
        self.clicks = 0
        self.filled: list[str] = []

    def click(self) -> None:
        self.clicks += 1

    def fill(self, text: str) -> None:
        self.filled.append(text)

    def inner_text(self) -> str:
        return self.text

    def query(self, selector: str) -> "FakeElement | None":
        return self.children.get(selector)


class FakeDriver(DriverProtocol):
    """Records every call; selectors listed in `missing` time out."""

    def __init__(
        self,
        *,
        missing: tuple[str, ...] = (),
        page_text: str = "",
        elements: dict[str, list[FakeElement]] | None = None,
        inputs: list[FakeElement] | None = None,
        fail_navigation: bool = False,
    ) -> None:
        self.missing = set(missing)
        self.page_text = page_text
        self.elements = elements or {}
        self.inputs = inputs or []
        self.fail_navigation = fail_navigation

        # recording
        self.calls: list[tuple] = []
        self.stop_calls = 0

    def navigate(self, url: str) -> None:
        self.calls.append(("navigate", url))
        if self.fail_navigation:
            raise RuntimeError(f"net::ERR_NAME_NOT_RESOLVED at {url}")

    def wait_for_selector(self, selector: str, timeout: int) -> None:
        self.calls.append(("wait_for_selector", selector, timeout))
        if selector in self.missing:
            raise TimeoutError(f"Timeout {timeout}ms exceeded waiting for {selector}")

    def click(self, selector: str) -> None:
        self.calls.append(("click", selector))

    def query_all(self, selector: str) -> list[FakeElement]:
        self.calls.append(("query_all", selector))
        return self.elements.get(selector, [])

    def fill(self, selector: str, text: str) -> None:
        self.calls.append(("fill", selector, text))

    def visible_inputs(self) -> list[FakeElement]:
        self.calls.append(("visible_inputs",))
        return self.inputs

    def sleep(self, milliseconds: float) -> None:
        self.calls.append(("sleep", milliseconds))

    def wait_for_text(self, text: str, timeout: int) -> None:
        self.calls.append(("wait_for_text", text, timeout))
        if text not in self.page_text:
            raise TimeoutError(f"Timeout {timeout}ms exceeded waiting for text")

    def scroll_to_text(self, text: str) -> None:
        self.calls.append(("scroll_to_text", text))

    def scroll_to_selector(self, selector: str) -> None:
        self.calls.append(("scroll_to_selector", selector))

    def stop(self) -> None:
        self.stop_calls += 1


@pytest.fixture
def config() -> Config:
    return Config()


@pytest.fixture
def fake_driver_factory():
    """Return a factory that constructs a configured FakeDriver.

    Usage:
        driver = fake_driver_factory(missing=("#login",), page_text="Welcome")
    """

    def _factory(**kwargs) -> FakeDriver:
        return FakeDriver(**kwargs)

    return _factory


@pytest.fixture
def driver_opener():
    """Wrap a FakeDriver in a context manager that stops it on exit, like open_driver."""

    def _opener(driver: FakeDriver):
        opened: list[FakeDriver] = []

        @contextmanager
        def _open() -> Iterator[FakeDriver]:
            opened.append(driver)
            try:
                yield driver
            finally:
                driver.stop()

        _open.opened = opened
        return _open

    return _opener
