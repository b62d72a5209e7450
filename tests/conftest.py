"""
Shared fixtures: a recording in-memory Driver and a clean global configuration.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, Callable, Optional

import pytest

from balin.core.browser import Browser
from balin.core.config import DEFAULT_SETUP, ConfigurationSetup, configure
from balin.core.errors import (
    NavigationError,
    NoDialogPresentError,
    NoFrameFoundError,
    NoSuchWindowError,
    WaitTimeoutError,
)


class FakeAlert:
    def __init__(self, driver: "FakeDriver", text: str) -> None:
        self._driver = driver
        self._text = text
        self.sent: list[str] = []

    @property
    def text(self) -> str:
        return self._text

    def accept(self) -> None:
        self._driver.calls.append(("alert.accept",))
        self._driver.dialog = None

    def dismiss(self) -> None:
        self._driver.calls.append(("alert.dismiss",))
        self._driver.dialog = None

    def send_text(self, text: str) -> None:
        self.sent.append(text)


class FakeDriver:
    """
    Implements the Driver protocol in memory and records every call in
    `calls` so tests can assert on ordering.
    - `context` is "default", "alert" or "frame:<selector>"
    - `windows` maps handle -> optional window name
    """

    def __init__(self, url: str = "about:blank") -> None:
        self.calls: list[tuple[Any, ...]] = []
        self.url = url
        self.redirects: dict[str, str] = {}
        self.unreachable: set[str] = set()
        self.dialog: Optional[str] = None
        self.frames: set[Any] = set()
        self.context = "default"
        self.windows: dict[str, Optional[str]] = {"main": None}
        self.window = "main"
        self.quitted = False
        self.script_result: Any = None

    # helpers for tests
    def open_window(self, handle: str, name: Optional[str] = None) -> None:
        self.windows[handle] = name

    def called(self, name: str) -> list[tuple[Any, ...]]:
        return [c for c in self.calls if c[0] == name]

    def names(self) -> list[str]:
        return [c[0] for c in self.calls]

    # Driver protocol
    def quit(self) -> None:
        self.calls.append(("quit",))
        self.quitted = True

    def navigate(self, url: str) -> None:
        self.calls.append(("navigate", url))
        if url in self.unreachable:
            raise NavigationError("failed to open url", url=url)
        self.url = self.redirects.get(url, url)

    def current_url(self) -> str:
        return self.url

    def switch_to_alert(self) -> FakeAlert:
        self.calls.append(("switch_to_alert",))
        if self.dialog is None:
            raise NoDialogPresentError("no modal dialog is open")
        self.context = "alert"
        return FakeAlert(self, self.dialog)

    def switch_to_default_content(self) -> None:
        self.calls.append(("switch_to_default_content",))
        self.context = "default"

    def switch_to_frame(self, selector: Any) -> None:
        self.calls.append(("switch_to_frame", selector))
        if selector not in self.frames:
            raise NoFrameFoundError(selector)
        self.context = f"frame:{selector}"

    def switch_to_window(self, name_or_handle: str) -> None:
        self.calls.append(("switch_to_window", name_or_handle))
        if name_or_handle in self.windows:
            self.window = name_or_handle
            return
        for handle, name in self.windows.items():
            if name == name_or_handle:
                self.window = handle
                return
        raise NoSuchWindowError(f"no window found for {name_or_handle!r}")

    def current_window_handle(self) -> str:
        return self.window

    def all_window_handles(self) -> set[str]:
        return set(self.windows)

    def close_current_window(self) -> None:
        self.calls.append(("close_current_window", self.window))
        del self.windows[self.window]

    def execute_script(self, script: str, *args: Any) -> Any:
        self.calls.append(("execute_script", script, args))
        return self.script_result

    def wait_until(
        self, condition: Callable[[Any], Any], timeout: float, poll_frequency: float = 0.5
    ) -> Any:
        # evaluated once: the fake page never changes while waiting
        self.calls.append(("wait_until", timeout, poll_frequency))
        value = condition(self)
        if not value:
            raise WaitTimeoutError(f"condition not met within {timeout}s", url=self.url)
        return value


@pytest.fixture(autouse=True)
def _clean_configuration(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.delenv("BALIN_SETUP_NAME", raising=False)
    yield
    configure(
        auto_quit=DEFAULT_SETUP.auto_quit,
        driver_factory=DEFAULT_SETUP.driver_factory,
        setups={},
    )


@pytest.fixture()
def driver() -> FakeDriver:
    return FakeDriver()


@pytest.fixture()
def browser(driver: FakeDriver) -> Browser:
    return Browser(ConfigurationSetup(auto_quit=False, driver_factory=lambda: driver))
