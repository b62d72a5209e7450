"""
Browser driver protocol (abstraction).

This Protocol defines the minimal browser control surface the Browser
facade and its context scopes rely on. It allows plugging different
backends (Selenium today, a recording fake in the tests) without changing
the navigation or scoping logic.

Notes:
- All calls are synchronous and are expected to block until the browser
  has finished the operation.
- Implementations translate their own failures into `balin.core.errors`
  (NavigationError, NoDialogPresentError, NoFrameFoundError,
  NoSuchWindowError, WaitTimeoutError) so callers only ever see one
  taxonomy.
"""

from __future__ import annotations

from typing import Any, Callable, Protocol, TypeVar, Union

T = TypeVar("T")

# seconds between two evaluations of a wait condition
POLL_FREQUENCY = 0.5

# A frame is selected by zero-based index, by name-or-id, or by a
# previously located element handle (backend specific).
FrameSelector = Union[int, str, Any]


class Alert(Protocol):
    """A modal dialog (alert, confirm or prompt) the driver is switched to."""

    @property
    def text(self) -> str: ...

    def accept(self) -> None: ...
    def dismiss(self) -> None: ...
    def send_text(self, text: str) -> None: ...


class Driver(Protocol):
    # -------- lifecycle --------
    def quit(self) -> None: ...

    # -------- navigation --------
    def navigate(self, url: str) -> None: ...
    def current_url(self) -> str: ...

    # -------- context switching --------
    def switch_to_alert(self) -> Alert: ...
    def switch_to_default_content(self) -> None: ...
    def switch_to_frame(self, selector: FrameSelector) -> None: ...
    def switch_to_window(self, name_or_handle: str) -> None: ...

    # -------- windows --------
    def current_window_handle(self) -> str: ...
    def all_window_handles(self) -> set[str]: ...
    def close_current_window(self) -> None: ...

    # -------- utilities --------
    def execute_script(self, script: str, *args: Any) -> Any: ...
    def wait_until(
        self, condition: Callable[[Any], T], timeout: float, poll_frequency: float = POLL_FREQUENCY
    ) -> T: ...
