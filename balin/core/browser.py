"""
The Browser facade and the `drive` entry point.

`drive` resolves the effective configuration setup, builds a Browser
around a freshly created driver, hands it to the caller's block and quits
the driver afterwards when the setup asks for it:

    def search(browser: Browser) -> None:
        page = browser.to(IndexPage)
        with browser.with_frame("results", page=ResultsFrame) as results:
            ...

    drive(search)

Navigation (`at`, `to`) enforces each page's implicit at verification, and
the context helpers (`with_alert`, `with_frame`, `with_window`) always put
the driver back where it was, whatever happens inside the `with` block.
"""
# @file purpose: Provide the Browser facade, navigation and context helpers.

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Optional, TypeVar, Union, overload

from balin.io.driver import POLL_FREQUENCY, Alert, Driver, FrameSelector
from .config import (
    Configuration,
    ConfigurationSetup,
    desired_configuration,
    resolve,
    selected_setup_name,
)
from .errors import (
    AmbiguousWindowError,
    ArrivalVerificationError,
    MissingUrlError,
    NoDialogPresentError,
    NoNewWindowError,
)
from .page import P, PageFactory
from .scope import context_scope
from .settings import get_settings

logger = logging.getLogger(__name__)

R = TypeVar("R")
T = TypeVar("T")


class Browser:
    """
    Binds a driver to the configuration setup that created it.

    The driver is created once, on construction, and belongs to this
    browser for its whole lifetime.
    """

    def __init__(self, configuration_setup: ConfigurationSetup) -> None:
        self._configuration_setup = configuration_setup
        self._driver: Driver = configuration_setup.driver_factory()

    @property
    def configuration_setup(self) -> ConfigurationSetup:
        return self._configuration_setup

    @property
    def driver(self) -> Driver:
        return self._driver

    @property
    def current_url(self) -> str:
        return self._driver.current_url()

    def quit(self) -> None:
        logger.debug("Quitting driver")
        self._driver.quit()

    def execute_script(self, script: str, *args: Any) -> Any:
        return self._driver.execute_script(script, *args)

    def wait_for(
        self,
        condition: Callable[[Any], T],
        timeout: Optional[float] = None,
        poll_frequency: float = POLL_FREQUENCY,
    ) -> T:
        """
        Poll ``condition`` until it returns a truthy value and return it.

        The condition receives the backend's native driver, so Selenium's
        expected conditions work as-is. ``timeout`` defaults to the
        configured page load timeout.

        Raises WaitTimeoutError when the condition never holds.
        """
        if timeout is None:
            timeout = get_settings().page_load_timeout_seconds
        return self._driver.wait_until(condition, timeout, poll_frequency)

    # ---------------- navigation ----------------

    def at(self, factory: PageFactory[P]) -> P:
        """
        Build the page the browser should already be showing and run its
        implicit at verification. No navigation takes place.

        Raises ArrivalVerificationError if the verification fails.
        """
        return self._verify_at(factory(self))

    @overload
    def to(self, target: str) -> str: ...

    @overload
    def to(self, target: PageFactory[P]) -> P: ...

    def to(self, target: Union[str, PageFactory[P]]) -> Union[str, P]:
        """
        Navigate to a literal URL, returning the browser's URL afterwards
        (which may differ after redirects), or to a page, returning the page
        once its implicit at verification has passed.

        Raises MissingUrlError, before navigating, if the page has no url.
        """
        if isinstance(target, str):
            logger.info(f"Navigating to {target}")
            self._driver.navigate(target)
            return self._driver.current_url()

        page = target(self)
        if page.url is None:
            raise MissingUrlError(type(page))

        logger.info(f"Navigating to {type(page).__name__} at {page.url}")
        self._driver.navigate(page.url)
        return self._verify_at(page)

    def _verify_at(self, page: P) -> P:
        if not page.verify_at():
            raise ArrivalVerificationError(type(page))
        return page

    # ---------------- context helpers ----------------

    @contextmanager
    def with_alert(self) -> Iterator[Alert]:
        """
        Switch to the active modal dialog for the duration of the block.

        A dialog left open by the block is dismissed; the driver always
        returns to the default content.

        Raises NoDialogPresentError if no dialog is open.
        """
        with context_scope(self._driver.switch_to_alert, self._leave_alert, name="alert") as alert:
            yield alert

    def _leave_alert(self, alert: Optional[Alert]) -> None:
        try:
            if alert is not None:
                self._dismiss_lingering_alert()
        finally:
            self._driver.switch_to_default_content()

    def _dismiss_lingering_alert(self) -> None:
        try:
            lingering = self._driver.switch_to_alert()
        except NoDialogPresentError:
            return
        logger.debug("Dismissing dialog left open by the alert block")
        lingering.dismiss()

    @contextmanager
    def with_frame(
        self,
        selector: FrameSelector,
        page: Optional[PageFactory[P]] = None,
    ) -> Iterator[Optional[P]]:
        """
        Switch to a frame selected by (zero-based) index, name-or-id (a name
        match wins over an id match) or previously located element.

        When ``page`` is given, the block receives that page built with
        `at` semantics inside the frame. The driver always returns to the
        default content.

        Raises NoFrameFoundError if the frame cannot be found.
        """

        def enter() -> FrameSelector:
            self._driver.switch_to_frame(selector)
            return selector

        def restore(_: Optional[FrameSelector]) -> None:
            self._driver.switch_to_default_content()

        with context_scope(enter, restore, name=f"frame {selector!r}"):
            yield self.at(page) if page is not None else None

    @contextmanager
    def with_window(self, name_or_handle: Optional[str] = None) -> Iterator[str]:
        """
        Switch to another window for the duration of the block and yield its
        handle.

        Without ``name_or_handle`` the target is inferred, which only works
        when exactly one other window is open. On exit the target window is
        closed if it is still open and is not the original one, then the
        driver switches back to the original window.

        Raises NoNewWindowError or AmbiguousWindowError when the target
        cannot be inferred, NoSuchWindowError when it cannot be found.
        """
        original = self._driver.current_window_handle()
        target = name_or_handle if name_or_handle is not None else self._other_window(original)

        def enter() -> str:
            self._driver.switch_to_window(target)
            return self._driver.current_window_handle()

        def restore(handle: Optional[str]) -> None:
            try:
                if (
                    handle is not None
                    and handle != original
                    and handle in self._driver.all_window_handles()
                ):
                    logger.debug(f"Closing window {handle}")
                    self._driver.switch_to_window(handle)
                    self._driver.close_current_window()
            finally:
                self._driver.switch_to_window(original)

        with context_scope(enter, restore, name=f"window {target!r}") as handle:
            yield handle

    def _other_window(self, original: str) -> str:
        others = self._driver.all_window_handles() - {original}
        if not others:
            raise NoNewWindowError("no new window was found")
        if len(others) > 1:
            raise AmbiguousWindowError(others)
        return next(iter(others))


# =============================================================================
# Entry points
# =============================================================================


@contextmanager
def session(
    configuration: Optional[ConfigurationSetup] = None,
    *,
    driver_factory: Optional[Callable[[], Driver]] = None,
    auto_quit: Optional[bool] = None,
    setup_name: Optional[str] = None,
) -> Iterator[Browser]:
    """
    Open a browser session governed by the effective configuration setup.

    Either pass a ``configuration`` (local behaviour for this session only)
    or let the desired global configuration supply the defaults, optionally
    overriding ``driver_factory`` and ``auto_quit``. In both cases the named
    setup selected by ``setup_name`` (default: BALIN_SETUP_NAME, then
    "default") wins when the configuration defines it.
    """
    selector = selected_setup_name(setup_name)

    if configuration is None:
        desired = desired_configuration(selector)
        configuration = Configuration(
            auto_quit=desired.auto_quit if auto_quit is None else auto_quit,
            driver_factory=driver_factory or desired.driver_factory,
        )
    elif driver_factory is not None or auto_quit is not None:
        raise TypeError("pass either a configuration or driver_factory/auto_quit, not both")

    overrides = configuration.setups if isinstance(configuration, Configuration) else {}
    setup = resolve(configuration, overrides, selector)
    browser = Browser(setup)
    try:
        yield browser
    finally:
        if setup.auto_quit:
            browser.quit()


def drive(
    block: Callable[[Browser], R],
    configuration: Optional[ConfigurationSetup] = None,
    *,
    driver_factory: Optional[Callable[[], Driver]] = None,
    auto_quit: Optional[bool] = None,
    setup_name: Optional[str] = None,
) -> R:
    """Run ``block`` against a new browser session and return its result."""
    with session(
        configuration,
        driver_factory=driver_factory,
        auto_quit=auto_quit,
        setup_name=setup_name,
    ) as browser:
        return block(browser)
