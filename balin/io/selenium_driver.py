"""
Selenium-based Driver implementation.

Conforms to io/driver.py's Driver Protocol:
- navigate(url) / current_url()
- switch_to_alert() / switch_to_default_content()
- switch_to_frame(index | name-or-id | element)
- switch_to_window(name_or_handle)
- current_window_handle() / all_window_handles() / close_current_window()
- execute_script(script, *args) / wait_until(condition, timeout) / quit()

Selenium failures are translated into balin.core.errors so that scopes and
callers never have to catch selenium.common.exceptions directly.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, TypeVar

from selenium.common.exceptions import (
    NoAlertPresentException,
    NoSuchFrameException,
    NoSuchWindowException,
    TimeoutException,
    WebDriverException,
)
from selenium.webdriver.common.alert import Alert as WebDriverAlert
from selenium.webdriver.common.by import By
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.remote.webelement import WebElement
from selenium.webdriver.support.ui import WebDriverWait

from balin.core.errors import (
    NavigationError,
    NoDialogPresentError,
    NoFrameFoundError,
    NoSuchWindowError,
    WaitTimeoutError,
)
from .driver import POLL_FREQUENCY, FrameSelector

T = TypeVar("T")

logger = logging.getLogger(__name__)

FRAME_TAGS = ("frame", "iframe")


class SeleniumAlert:
    """Adapts a Selenium `Alert` to the balin Alert protocol."""

    def __init__(self, alert: WebDriverAlert) -> None:
        self._alert = alert

    @property
    def text(self) -> str:
        return self._alert.text

    def accept(self) -> None:
        self._alert.accept()

    def dismiss(self) -> None:
        self._alert.dismiss()

    def send_text(self, text: str) -> None:
        self._alert.send_keys(text)


class SeleniumDriver:
    """
    A concrete Driver wrapping a Selenium `WebDriver`.
    - The wrapped driver stays reachable through `webdriver` for anything
      the protocol does not cover (element lookups, waits, cookies).
    - Frames referenced by a string are resolved by name first, then by id.
    """

    def __init__(self, webdriver: WebDriver) -> None:
        self._driver = webdriver

    @property
    def webdriver(self) -> WebDriver:
        return self._driver

    # ---------------- lifecycle ----------------

    def quit(self) -> None:
        self._driver.quit()

    # ---------------- navigation ----------------

    def navigate(self, url: str) -> None:
        try:
            self._driver.get(url)
        except WebDriverException as e:
            raise NavigationError("failed to open url", url=url, cause=e) from e

    def current_url(self) -> str:
        return self._driver.current_url

    # ---------------- context switching ----------------

    def switch_to_alert(self) -> SeleniumAlert:
        try:
            return SeleniumAlert(self._driver.switch_to.alert)
        except NoAlertPresentException as e:
            raise NoDialogPresentError("no modal dialog is open", cause=e) from e

    def switch_to_default_content(self) -> None:
        self._driver.switch_to.default_content()

    def switch_to_frame(self, selector: FrameSelector) -> None:
        reference = self._locate_frame(selector) if isinstance(selector, str) else selector
        try:
            self._driver.switch_to.frame(reference)
        except NoSuchFrameException as e:
            raise NoFrameFoundError(selector, cause=e) from e

    def switch_to_window(self, name_or_handle: str) -> None:
        try:
            self._driver.switch_to.window(name_or_handle)
        except NoSuchWindowException as e:
            raise NoSuchWindowError(
                f"no window found for {name_or_handle!r}", cause=e
            ) from e

    # ---------------- windows ----------------

    def current_window_handle(self) -> str:
        return self._driver.current_window_handle

    def all_window_handles(self) -> set[str]:
        return set(self._driver.window_handles)

    def close_current_window(self) -> None:
        self._driver.close()

    # ---------------- utilities ----------------

    def execute_script(self, script: str, *args: Any) -> Any:
        return self._driver.execute_script(script, *args)

    def wait_until(
        self, condition: Callable[[WebDriver], T], timeout: float, poll_frequency: float = POLL_FREQUENCY
    ) -> T:
        try:
            return WebDriverWait(self._driver, timeout, poll_frequency=poll_frequency).until(condition)
        except TimeoutException as e:
            raise WaitTimeoutError(
                f"condition not met within {timeout}s",
                url=self._driver.current_url,
                cause=e,
            ) from e

    # ---------------- internals ----------------

    def _locate_frame(self, name_or_id: str) -> WebElement:
        """
        Selenium's own string lookup tries the id before the name; frames
        located by a matching name attribute must win over an id match.
        """
        for by in (By.NAME, By.ID):
            for element in self._driver.find_elements(by, name_or_id):
                if element.tag_name.lower() in FRAME_TAGS:
                    logger.debug(f"Resolved frame {name_or_id!r} by {by}")
                    return element
        raise NoFrameFoundError(name_or_id)
