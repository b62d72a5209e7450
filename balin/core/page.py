"""
Page Object contract.

A page is anything that can tell where it lives (`url`, optional) and
whether the browser is currently showing it (`verify_at`). Concrete pages
usually subclass `Page`, but any object satisfying `PageContract` works
with `Browser.at` and `Browser.to`.
"""
# @file purpose: Define the Page Object contract.

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, ClassVar, Optional, Protocol, TypeVar

if TYPE_CHECKING:
    from .browser import Browser


class PageContract(Protocol):
    url: Optional[str]

    def verify_at(self) -> bool: ...


P = TypeVar("P", bound=PageContract)

PageFactory = Callable[["Browser"], P]


class Page:
    """
    Base Page Object.

    Subclasses set `url` to allow navigation with `Browser.to` and override
    `verify_at` to perform an implicit at verification:

        class IndexPage(Page):
            url = "https://example.com/"

            def verify_at(self) -> bool:
                return self.browser.current_url.startswith(self.url)
    """

    url: ClassVar[Optional[str]] = None

    def __init__(self, browser: "Browser") -> None:
        self.browser = browser

    def verify_at(self) -> bool:
        return True
