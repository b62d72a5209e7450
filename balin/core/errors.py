"""
Error taxonomy shared by the browser facade, the context scopes and the
driver adapters.
- BalinError: base class for every custom error
- MissingUrlError / ArrivalVerificationError: page navigation contract
- NavigationError: the driver could not load a URL
- WaitTimeoutError: a waited-for condition never held
- NoDialogPresentError / NoFrameFoundError: alert and frame switching
- NoSuchWindowError (+ NoNewWindowError, AmbiguousWindowError): window switching
"""
# @file purpose: Define error taxonomy for balin.

from typing import Any


class BalinError(Exception):
    """
    Base class for all custom errors in balin.

    Carries optional context so the CLI and log lines can print the same
    diagnostics regardless of where the error was raised.
    """

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        details: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.url: str | None = url
        self.details: dict[str, Any] = details or {}
        self.cause: BaseException | None = cause

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.url:
            parts.append(f"url={self.url}")
        if self.details:
            kv = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            parts.append(f"details={{ {kv} }}")
        return " | ".join(parts)


class MissingUrlError(BalinError):
    """Raised by ``Browser.to`` when the page does not declare a URL."""

    def __init__(self, page: type, **kwargs: Any) -> None:
        super().__init__(f"{page.__name__} does not define a url", **kwargs)
        self.page = page


class ArrivalVerificationError(BalinError):
    """Raised when a page's implicit at verification returns False."""

    def __init__(self, page: type, **kwargs: Any) -> None:
        super().__init__(f"implicit at verification failed for {page.__name__}", **kwargs)
        self.page = page


class NavigationError(BalinError):
    """Raised when the driver fails to load a URL."""


class WaitTimeoutError(BalinError):
    """Raised when a waited-for condition does not hold within the timeout."""


class NoDialogPresentError(BalinError):
    """Raised when switching to a modal dialog while none is open."""


class NoFrameFoundError(BalinError):
    """Raised when a frame cannot be resolved from the given selector."""

    def __init__(self, selector: Any, **kwargs: Any) -> None:
        super().__init__(f"no frame found for {selector!r}", **kwargs)
        self.selector = selector


class NoSuchWindowError(BalinError):
    """Raised when a window cannot be found by its name or handle."""


class NoNewWindowError(NoSuchWindowError):
    """Raised when no window other than the current one is open."""


class AmbiguousWindowError(NoSuchWindowError):
    """Raised when the target window cannot be determined automatically."""

    def __init__(self, candidates: set[str], **kwargs: Any) -> None:
        super().__init__(
            "the window cannot be determined automatically",
            details={"candidates": sorted(candidates)},
            **kwargs,
        )
        self.candidates = candidates
