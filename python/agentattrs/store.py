"""
Attribute Store
===============

Holds the attributes collected for one unit of work (for example a
transaction). User attributes and agent attributes are kept apart so that
key collisions between them are settled by whatever consumes the output,
not here.

Destinations are resolved when an attribute is added, using the
:class:`~agentattrs.config.AttributeConfig` the store was created with.
Rendering with :meth:`AttributeStore.user_to_obj` or
:meth:`AttributeStore.agent_to_obj` only filters by those resolved
destinations.

Limits:
  - Keys and string values longer than 255 characters are truncated.
  - At most 64 user attributes are stored. Further user adds are
    skipped and report ``Outcome.LIMIT_REACHED``; nothing is evicted.
  - Agent attributes are not counted against any limit.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any, Union

from agentattrs.config import AttributeConfig
from agentattrs.destinations import Destination
from agentattrs.errors import AgentAttrsError
from agentattrs.resolver import resolve
from agentattrs.values import AttributeValue, Scalar

logger = logging.getLogger(__name__)

KEY_LENGTH_LIMIT = 255
VALUE_LENGTH_LIMIT = 255
USER_ATTRIBUTE_LIMIT = 64


class Outcome(enum.Enum):
    """Result of adding an attribute."""

    SUCCESS = "success"
    LIMIT_REACHED = "limit_reached"
    INVALID_INPUT = "invalid_input"


class Origin(enum.Enum):
    USER = "user"
    AGENT = "agent"


@dataclass(frozen=True)
class Attribute:
    key: str
    value: AttributeValue
    destinations: Destination
    origin: Origin


class AttributeStore:
    """
    Bounded store of user and agent attributes.

    The store keeps a reference to ``config`` but never modifies it; one
    config may back many stores.
    """

    def __init__(self, config: AttributeConfig):
        self.config = config
        self._user: list[Attribute] = []
        self._agent: list[Attribute] = []

    def __len__(self) -> int:
        return len(self._user) + len(self._agent)

    def __repr__(self) -> str:
        return f"AttributeStore(user={len(self._user)}, agent={len(self._agent)})"

    @property
    def user_attributes(self) -> tuple[Attribute, ...]:
        return tuple(self._user)

    @property
    def agent_attributes(self) -> tuple[Attribute, ...]:
        return tuple(self._agent)

    @property
    def user_limit_reached(self) -> bool:
        return len(self._user) >= USER_ATTRIBUTE_LIMIT

    # ===========================================================
    # Adding attributes
    # ===========================================================

    def _create(
        self,
        default_destinations: Union[Destination, int],
        key: Any,
        value: Any,
        origin: Origin,
    ) -> Union[Attribute, Outcome]:
        if not isinstance(key, str) or not key:
            logger.debug(f"Rejected {origin.value} attribute with invalid key {key!r}")
            return Outcome.INVALID_INPUT
        try:
            value = AttributeValue.of(value)
            default_destinations = Destination.coerce(default_destinations)
        except AgentAttrsError as e:
            logger.debug(f"Rejected {origin.value} attribute {key!r}: {e}")
            return Outcome.INVALID_INPUT

        key = key[:KEY_LENGTH_LIMIT]
        destinations = resolve(key, default_destinations, self.config)
        return Attribute(
            key=key,
            value=value.truncated(VALUE_LENGTH_LIMIT),
            destinations=destinations,
            origin=origin,
        )

    def user_add(
        self,
        default_destinations: Union[Destination, int],
        key: str,
        value: Any,
    ) -> Outcome:
        """
        Add a user attribute.

        ``value`` may be an :class:`AttributeValue` or a Python scalar
        (str, int, float, bool or None).
        """
        if self.user_limit_reached:
            logger.debug(
                f"User attribute limit ({USER_ATTRIBUTE_LIMIT}) reached, skipping {key!r}"
            )
            return Outcome.LIMIT_REACHED
        attribute = self._create(default_destinations, key, value, Origin.USER)
        if isinstance(attribute, Outcome):
            return attribute
        self._user.append(attribute)
        return Outcome.SUCCESS

    def user_add_string(
        self,
        default_destinations: Union[Destination, int],
        key: str,
        value: str,
    ) -> Outcome:
        if not isinstance(value, str):
            return Outcome.INVALID_INPUT
        return self.user_add(default_destinations, key, value)

    def user_add_long(
        self,
        default_destinations: Union[Destination, int],
        key: str,
        value: int,
    ) -> Outcome:
        if isinstance(value, bool) or not isinstance(value, int):
            return Outcome.INVALID_INPUT
        return self.user_add(default_destinations, key, value)

    def _agent_add(
        self,
        default_destinations: Union[Destination, int],
        key: str,
        value: AttributeValue,
    ) -> Outcome:
        attribute = self._create(default_destinations, key, value, Origin.AGENT)
        if isinstance(attribute, Outcome):
            return attribute
        self._agent.append(attribute)
        return Outcome.SUCCESS

    def agent_add_long(
        self,
        default_destinations: Union[Destination, int],
        key: str,
        value: int,
    ) -> Outcome:
        try:
            typed = AttributeValue.integer(value)
        except AgentAttrsError as e:
            logger.debug(f"Rejected agent attribute {key!r}: {e}")
            return Outcome.INVALID_INPUT
        return self._agent_add(default_destinations, key, typed)

    def agent_add_string(
        self,
        default_destinations: Union[Destination, int],
        key: str,
        value: str,
    ) -> Outcome:
        try:
            typed = AttributeValue.string(value)
        except AgentAttrsError as e:
            logger.debug(f"Rejected agent attribute {key!r}: {e}")
            return Outcome.INVALID_INPUT
        return self._agent_add(default_destinations, key, typed)

    # ===========================================================
    # Rendering
    # ===========================================================

    @staticmethod
    def _to_obj(
        attributes: list[Attribute],
        destinations: Union[Destination, int],
    ) -> dict[str, Scalar]:
        mask = Destination.coerce(destinations)
        out: dict[str, Scalar] = {}
        for attribute in attributes:
            if attribute.destinations.intersects(mask):
                out[attribute.key] = attribute.value.to_output()
        return out

    def user_to_obj(self, destinations: Union[Destination, int]) -> dict[str, Scalar]:
        """
        Return the user attributes sent to any of ``destinations``.

        When a key was added more than once the latest value wins.
        """
        return self._to_obj(self._user, destinations)

    def agent_to_obj(self, destinations: Union[Destination, int]) -> dict[str, Scalar]:
        """Return the agent attributes sent to any of ``destinations``."""
        return self._to_obj(self._agent, destinations)

    def destroy(self) -> None:
        """Drop all attributes. The config is not owned and is left alone."""
        self._user.clear()
        self._agent.clear()


__all__ = [
    "Attribute",
    "AttributeStore",
    "Origin",
    "Outcome",
    "KEY_LENGTH_LIMIT",
    "VALUE_LENGTH_LIMIT",
    "USER_ATTRIBUTE_LIMIT",
]
