from __future__ import annotations

import pytest

from balin.core.browser import Browser, drive, session
from balin.core.config import Configuration, ConfigurationSetup, configure
from conftest import FakeDriver


class DriverBox:
    """Factory that remembers every driver it created."""

    def __init__(self) -> None:
        self.created: list[FakeDriver] = []

    def __call__(self) -> FakeDriver:
        d = FakeDriver()
        self.created.append(d)
        return d


def test_drive_returns_the_block_result() -> None:
    box = DriverBox()
    url = drive(lambda b: b.to("https://example.test/"), driver_factory=box)
    assert url == "https://example.test/"


def test_drive_quits_the_driver_when_auto_quit() -> None:
    box = DriverBox()
    drive(lambda b: None, Configuration(auto_quit=True, driver_factory=box))
    assert [d.quitted for d in box.created] == [True]


def test_drive_keeps_the_driver_without_auto_quit() -> None:
    box = DriverBox()
    drive(lambda b: None, Configuration(auto_quit=False, driver_factory=box))
    assert [d.quitted for d in box.created] == [False]


def test_drive_quits_even_when_the_block_fails() -> None:
    box = DriverBox()

    def block(b: Browser) -> None:
        raise RuntimeError("test failed")

    with pytest.raises(RuntimeError, match="test failed"):
        drive(block, Configuration(auto_quit=True, driver_factory=box))
    assert box.created[0].quitted


def test_each_session_owns_a_fresh_driver() -> None:
    box = DriverBox()
    first = drive(lambda b: b.driver, driver_factory=box)
    second = drive(lambda b: b.driver, driver_factory=box)
    assert first is not second
    assert len(box.created) == 2


def test_keyword_arguments_override_the_global_configuration() -> None:
    box = DriverBox()
    configure(auto_quit=True, driver_factory=box)
    with session(auto_quit=False) as browser:
        assert browser.configuration_setup.auto_quit is False
        assert browser.configuration_setup.driver_factory is box
    assert box.created[0].quitted is False


def test_session_uses_the_global_named_setup() -> None:
    default_box, qa_box = DriverBox(), DriverBox()
    qa = ConfigurationSetup(auto_quit=False, driver_factory=qa_box)
    configure(driver_factory=default_box, setups={"qa": qa})

    with session(setup_name="qa") as browser:
        assert browser.configuration_setup.driver_factory is qa_box
    assert default_box.created == []
    assert qa_box.created[0].quitted is False


def test_session_selects_a_local_named_setup() -> None:
    box = DriverBox()
    qa = ConfigurationSetup(auto_quit=False, driver_factory=box)
    local = Configuration(auto_quit=True, driver_factory=DriverBox(), setups={"qa": qa})

    with session(local, setup_name="qa") as browser:
        assert browser.configuration_setup == qa


def test_session_with_a_plain_setup_has_no_named_overrides() -> None:
    box = DriverBox()
    plain = ConfigurationSetup(auto_quit=False, driver_factory=box)

    with session(plain, setup_name="qa") as browser:
        assert browser.configuration_setup is plain
    assert box.created[0].quitted is False


def test_configuration_and_keywords_are_exclusive() -> None:
    with pytest.raises(TypeError):
        with session(Configuration(driver_factory=DriverBox()), auto_quit=False):
            pytest.fail("session must not open")


def test_browser_exposes_its_setup_and_driver(browser: Browser, driver: FakeDriver) -> None:
    assert browser.driver is driver
    assert browser.configuration_setup.auto_quit is False
    browser.quit()
    assert driver.quitted
