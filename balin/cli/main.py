"""
CLI entrypoint.

doctor: print settings and the effective configuration setup.
open:   drive a browser to a URL and report where it ended up.
"""

from __future__ import annotations

import functools
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from ..core.browser import Browser, drive
from ..core.config import current_configuration, desired_configuration, selected_setup_name
from ..core.errors import BalinError
from ..core.log import setup_logging
from ..core.settings import get_settings
from ..io.factories import DriverFactory, chrome_driver, firefox_driver

app = typer.Typer(help="balin CLI")
console = Console()


def _describe_factory(factory: object) -> str:
    if isinstance(factory, functools.partial):
        return f"{_describe_factory(factory.func)}(...)"
    return getattr(factory, "__qualname__", repr(factory))


@app.command("doctor")
def doctor(
    setup: Optional[str] = typer.Option(None, "--setup", help="Named setup to resolve"),
) -> None:
    """Environment check: print settings and the setup a session would use."""
    s = get_settings()
    selector = selected_setup_name(setup)
    effective = desired_configuration(selector)
    named = sorted(current_configuration().setups)

    console.print("[bold green]balin[/] environment")
    console.print(f"- browser:  {s.browser} (headless: {s.headless})")
    console.print(f"- timeout:  {s.page_load_timeout_seconds}s")
    console.print(f"- setup:    {selector}")
    console.print(f"- named setups: {named or '[]'}")
    console.print(f"- auto quit: {effective.auto_quit}")
    console.print(f"- driver factory: {_describe_factory(effective.driver_factory)}")


@app.command("open")
def open_url(
    url: str = typer.Argument(..., help="URL to navigate to"),
    setup: Optional[str] = typer.Option(None, "--setup", help="Named setup to resolve"),
    browser: Optional[str] = typer.Option(None, "--browser", help="firefox or chrome"),
    headless: Optional[bool] = typer.Option(
        None, "--headless/--no-headless", help="Run browser headless"
    ),
) -> None:
    """
    Navigate to URL inside a session and print the final URL (after
    redirects) and the number of open windows. Exits non-zero on failure.
    """
    s = get_settings()
    setup_logging(s.log_level, console=console)

    factory: Optional[DriverFactory] = None
    if browser is not None or headless is not None:
        name = browser or s.browser
        if name not in ("firefox", "chrome"):
            typer.secho(f"[open] unsupported browser: {name}", fg=typer.colors.RED)
            raise typer.Exit(code=2)
        factory = functools.partial(
            chrome_driver if name == "chrome" else firefox_driver,
            headless=s.headless if headless is None else headless,
            driver_path=s.driver_path,
            page_load_timeout_seconds=s.page_load_timeout_seconds,
        )

    def _visit(b: Browser) -> tuple[str, int]:
        final = b.to(url)
        return final, len(b.driver.all_window_handles())

    try:
        final_url, windows = drive(_visit, driver_factory=factory, setup_name=setup)
    except BalinError as e:
        typer.secho(f"[open] {e}", fg=typer.colors.RED)
        raise typer.Exit(code=1)

    table = Table(title="Open Result", show_header=True, header_style="bold")
    table.add_column("requested")
    table.add_column("final")
    table.add_column("windows", justify="right")
    table.add_row(url, final_url, str(windows))
    console.print(table)
    typer.secho("[open] completed successfully", fg=typer.colors.GREEN)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
