"""
Configuration data contracts and setup resolution.
- ConfigurationSetup: how a driver is created and whether it is quit at the
  end of a session (immutable, compared by value)
- Configuration: a setup plus a table of named alternative setups
- resolve(): pick the effective setup for a selector
- configure() / desired_configuration(): the process-wide configuration

The global configuration is a single immutable Configuration that
`configure()` replaces wholesale. It is not guarded by a lock: mutating it
from several threads at once is the caller's responsibility.
"""
# @file purpose: Define configuration models and the setup resolver.

from __future__ import annotations

import logging
from typing import Callable, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from balin.io.driver import Driver
from balin.io.factories import default_driver_factory
from .settings import get_settings

logger = logging.getLogger(__name__)

DEFAULT_SETUP_NAME = "default"


class ConfigurationSetup(BaseModel):
    model_config = ConfigDict(frozen=True)

    auto_quit: bool = Field(default=True, description="Quit the driver when the session ends.")
    driver_factory: Callable[[], Driver] = Field(
        default=default_driver_factory, description="Creates the driver for a session."
    )


class Configuration(ConfigurationSetup):
    setups: dict[str, ConfigurationSetup] = Field(
        default_factory=dict, description="Named setups selectable at runtime."
    )


DEFAULT_SETUP = ConfigurationSetup()

_configuration: Configuration = Configuration(
    auto_quit=DEFAULT_SETUP.auto_quit, driver_factory=DEFAULT_SETUP.driver_factory
)


def resolve(
    base: ConfigurationSetup,
    overrides: Mapping[str, ConfigurationSetup],
    selector: str = DEFAULT_SETUP_NAME,
) -> ConfigurationSetup:
    """Return ``overrides[selector]`` if present, otherwise ``base`` itself."""
    chosen = overrides.get(selector, base)
    logger.debug(
        f"Setup selector {selector!r} resolved to "
        f"{'named override' if chosen is not base else 'base configuration'}"
    )
    return chosen


def selected_setup_name(explicit: Optional[str] = None) -> str:
    """The selector to resolve with: the explicit value or BALIN_SETUP_NAME."""
    return explicit if explicit is not None else get_settings().setup_name


def current_configuration() -> Configuration:
    return _configuration


def configure(
    *,
    auto_quit: Optional[bool] = None,
    driver_factory: Optional[Callable[[], Driver]] = None,
    setups: Optional[Mapping[str, ConfigurationSetup]] = None,
) -> Configuration:
    """
    Replace the global configuration. Fields left as None keep their
    current value; calling it with no arguments changes nothing.
    """
    global _configuration

    current = _configuration
    _configuration = Configuration(
        auto_quit=current.auto_quit if auto_quit is None else auto_quit,
        driver_factory=current.driver_factory if driver_factory is None else driver_factory,
        setups=dict(current.setups if setups is None else setups),
    )
    return _configuration


def desired_configuration(selector: Optional[str] = None) -> ConfigurationSetup:
    """The global configuration after resolving the selected named setup."""
    configuration = _configuration
    return resolve(configuration, configuration.setups, selected_setup_name(selector))
