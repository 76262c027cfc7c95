"""
Attribute settings.

Customer-facing attribute settings and their translation into an
:class:`~agentattrs.config.AttributeConfig`. Settings come from keyword
arguments; anything left unset is read from the environment::

    AGENTATTRS_ATTRIBUTES_ENABLED=true
    AGENTATTRS_ATTRIBUTES_INCLUDE=request.parameters.*
    AGENTATTRS_ATTRIBUTES_EXCLUDE=request.headers.cookie,request.headers.authorization
    AGENTATTRS_ERROR_COLLECTOR_ATTRIBUTES_ENABLED=false
    AGENTATTRS_ATTRIBUTES_DISABLED_DESTINATIONS=browser_monitoring
    AGENTATTRS_BROWSER_MONITORING_ATTRIBUTES_INCLUDE=request.uri

List values are comma separated.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Optional

from agentattrs.config import AttributeConfig
from agentattrs.destinations import Destination
from agentattrs.errors import InvalidDestinationError, SettingsError

logger = logging.getLogger(__name__)

ENV_PREFIX = "AGENTATTRS_"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}

# Setting name -> (destination, enabled by default)
DESTINATION_SETTINGS: dict[str, tuple[Destination, bool]] = {
    "transaction_events": (Destination.TXN_EVENT, True),
    "transaction_tracer": (Destination.TXN_TRACE, True),
    "error_collector": (Destination.ERROR, True),
    "browser_monitoring": (Destination.BROWSER, False),
}


def parse_bool(raw: str, name: str = "") -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise SettingsError(f"Invalid boolean for {name or 'setting'}: {raw!r}")


def parse_list(raw: str) -> list[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


def _env(name: str) -> str:
    return os.getenv(ENV_PREFIX + name, "").strip()


@dataclass
class DestinationSettings:
    """``enabled``/``include``/``exclude`` for one destination."""

    enabled: Optional[bool] = None
    include: Optional[list[str]] = None
    exclude: Optional[list[str]] = None


@dataclass
class AttributeSettings:
    """All attribute settings, global and per destination."""

    enabled: Optional[bool] = None
    include: Optional[list[str]] = None
    exclude: Optional[list[str]] = None
    disabled_destinations: Optional[list[str]] = None
    transaction_events: DestinationSettings = field(default_factory=DestinationSettings)
    transaction_tracer: DestinationSettings = field(default_factory=DestinationSettings)
    error_collector: DestinationSettings = field(default_factory=DestinationSettings)
    browser_monitoring: DestinationSettings = field(default_factory=DestinationSettings)

    def __post_init__(self) -> None:
        self.enabled = self._fill_enabled(self.enabled, "ATTRIBUTES_ENABLED", True)
        self.include = self._fill_list(self.include, "ATTRIBUTES_INCLUDE")
        self.exclude = self._fill_list(self.exclude, "ATTRIBUTES_EXCLUDE")
        self.disabled_destinations = self._fill_list(
            self.disabled_destinations, "ATTRIBUTES_DISABLED_DESTINATIONS"
        )
        try:
            Destination.from_names(self.disabled_destinations)
        except InvalidDestinationError as e:
            raise SettingsError(f"Invalid disabled_destinations: {e}") from e

        for name, (_dest, default_enabled) in DESTINATION_SETTINGS.items():
            section: DestinationSettings = getattr(self, name)
            env_name = f"{name.upper()}_ATTRIBUTES"
            section.enabled = self._fill_enabled(
                section.enabled, f"{env_name}_ENABLED", default_enabled
            )
            section.include = self._fill_list(section.include, f"{env_name}_INCLUDE")
            section.exclude = self._fill_list(section.exclude, f"{env_name}_EXCLUDE")

    @staticmethod
    def _fill_list(current: Optional[list[str]], env_name: str) -> list[str]:
        if current is not None:
            return list(current)
        return parse_list(_env(env_name))

    @staticmethod
    def _fill_enabled(current: Optional[bool], env_name: str, default: bool) -> bool:
        if current is not None:
            return current
        raw = _env(env_name)
        if not raw:
            return default
        return parse_bool(raw, ENV_PREFIX + env_name)

    def build_config(self) -> AttributeConfig:
        """
        Translate these settings into an AttributeConfig.

        Global include/exclude apply to every destination; per-destination
        include/exclude only to their own. Disabled settings become
        disabled destinations, which always win.
        """
        config = AttributeConfig()

        if not self.enabled:
            config.disable_destinations(Destination.ALL)
        config.disable_destinations(Destination.from_names(self.disabled_destinations))

        for pattern in self.include:
            config.modify_destinations(pattern, Destination.ALL, Destination.NONE)
        for pattern in self.exclude:
            config.modify_destinations(pattern, Destination.NONE, Destination.ALL)

        for name, (dest, _default_enabled) in DESTINATION_SETTINGS.items():
            section: DestinationSettings = getattr(self, name)
            if not section.enabled:
                config.disable_destinations(dest)
            for pattern in section.include:
                config.modify_destinations(pattern, dest, Destination.NONE)
            for pattern in section.exclude:
                config.modify_destinations(pattern, Destination.NONE, dest)

        logger.debug(f"Built attribute config from settings: {config!r}")
        return config


__all__ = [
    "AttributeSettings",
    "DestinationSettings",
    "DESTINATION_SETTINGS",
    "parse_bool",
    "parse_list",
]
