"""
Driver factories: build a Selenium WebDriver and wrap it in SeleniumDriver.

A factory is a zero-argument callable returning a Driver; it is what a
ConfigurationSetup stores as `driver_factory`. `default_driver_factory`
reads the current settings (browser, headless, driver_path, page load
timeout) every time it is called.
"""

from __future__ import annotations

import logging
import shutil
from typing import Callable, Optional

from selenium import webdriver
from selenium.webdriver.chrome.options import Options as ChromeOptions
from selenium.webdriver.chrome.service import Service as ChromeService
from selenium.webdriver.firefox.options import Options as FirefoxOptions
from selenium.webdriver.firefox.service import Service as FirefoxService
from webdriver_manager.chrome import ChromeDriverManager
from webdriver_manager.firefox import GeckoDriverManager

from balin.core.settings import get_settings
from .selenium_driver import SeleniumDriver

logger = logging.getLogger(__name__)

DriverFactory = Callable[[], SeleniumDriver]


def firefox_driver(
    *,
    headless: bool = True,
    driver_path: Optional[str] = None,
    page_load_timeout_seconds: int = 30,
) -> SeleniumDriver:
    options = FirefoxOptions()
    if headless:
        options.add_argument("--headless")

    local_driver = driver_path or shutil.which("geckodriver")
    if local_driver:
        logger.info(f"Using local geckodriver at: {local_driver}")
        service = FirefoxService(executable_path=local_driver)
    else:
        logger.info("Local geckodriver not found. Falling back to webdriver_manager (requires internet).")
        service = FirefoxService(GeckoDriverManager().install())

    driver = webdriver.Firefox(service=service, options=options)
    driver.set_page_load_timeout(page_load_timeout_seconds)
    return SeleniumDriver(driver)


def chrome_driver(
    *,
    headless: bool = True,
    driver_path: Optional[str] = None,
    page_load_timeout_seconds: int = 30,
) -> SeleniumDriver:
    options = ChromeOptions()
    if headless:
        options.add_argument("--headless=new")
        options.add_argument("--disable-gpu")

    local_driver = driver_path or shutil.which("chromedriver")
    if local_driver:
        logger.info(f"Using local chromedriver at: {local_driver}")
        service = ChromeService(executable_path=local_driver)
    else:
        logger.info("Local chromedriver not found. Falling back to webdriver_manager (requires internet).")
        service = ChromeService(ChromeDriverManager().install())

    driver = webdriver.Chrome(service=service, options=options)
    driver.set_page_load_timeout(page_load_timeout_seconds)
    return SeleniumDriver(driver)


def default_driver_factory() -> SeleniumDriver:
    """Create the driver described by the current settings."""
    s = get_settings()
    build = chrome_driver if s.browser == "chrome" else firefox_driver
    return build(
        headless=s.headless,
        driver_path=s.driver_path,
        page_load_timeout_seconds=s.page_load_timeout_seconds,
    )
