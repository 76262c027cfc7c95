"""
Attribute Configuration
=======================

Customers control attributes in two ways:

* Disable destinations. A disabled destination never receives any
  attribute, no matter what other configuration says. Disabling all
  destinations turns attributes off entirely.
* Modify destinations. Each attribute is created with a default set of
  destinations; modifiers matching the attribute key add (include) or
  remove (exclude) destinations from that default.

A modifier matches by key. A single trailing ``*`` matches any suffix;
a ``*`` anywhere else is a literal character::

    config = AttributeConfig()
    config.disable_destinations(Destination.BROWSER)
    config.modify_destinations("request.headers.*", Destination.NONE, Destination.ALL)
    config.modify_destinations("request.headers.host", Destination.TXN_TRACE, Destination.NONE)

The configuration is identical for user and agent attributes. It is
built once and then shared read-only by any number of
:class:`agentattrs.store.AttributeStore` instances.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

from agentattrs.destinations import Destination

logger = logging.getLogger(__name__)

WILDCARD = "*"


@dataclass
class MatchRule:
    """A destination modifier created by ``modify_destinations``."""

    pattern: str
    prefix: str
    wildcard: bool
    include: Destination = Destination.NONE
    exclude: Destination = Destination.NONE

    @classmethod
    def from_pattern(
        cls,
        pattern: str,
        include: Destination = Destination.NONE,
        exclude: Destination = Destination.NONE,
    ) -> "MatchRule":
        # An empty pattern is treated like a lone "*": it matches every key.
        if not pattern:
            return cls(pattern, "", True, include, exclude)
        if pattern.endswith(WILDCARD):
            return cls(pattern, pattern[: -len(WILDCARD)], True, include, exclude)
        return cls(pattern, pattern, False, include, exclude)

    @property
    def specificity(self) -> int:
        return len(self.prefix)

    def matches(self, key: str) -> bool:
        if self.wildcard:
            return key.startswith(self.prefix)
        return key == self.prefix


class AttributeConfig:
    """
    Attribute routing policy: disabled destinations plus ordered modifiers.

    Rules keep their creation order in :attr:`rules`. Resolution uses
    :meth:`rules_by_specificity`, which is sorted once and cached until the
    next modification.
    """

    def __init__(self) -> None:
        self._disabled = Destination.NONE
        self._rules: list[MatchRule] = []
        self._by_pattern: dict[str, MatchRule] = {}
        self._sorted: Optional[tuple[MatchRule, ...]] = None

    def __repr__(self) -> str:
        return (
            f"AttributeConfig(disabled={self._disabled!r}, "
            f"rules={len(self._rules)})"
        )

    @property
    def disabled(self) -> Destination:
        return self._disabled

    @property
    def rules(self) -> tuple[MatchRule, ...]:
        return tuple(self._rules)

    def disable_destinations(self, destinations: Union[Destination, int]) -> None:
        """
        Disable attribute destinations.

        Disabled destinations accumulate: calling this repeatedly or-s the
        sets together and nothing ever re-enables a destination.
        """
        destinations = Destination.coerce(destinations)
        self._disabled |= destinations
        logger.debug(f"Attribute destinations disabled: {self._disabled!r}")

    def modify_destinations(
        self,
        pattern: str,
        include: Union[Destination, int] = Destination.NONE,
        exclude: Union[Destination, int] = Destination.NONE,
    ) -> None:
        """
        Change the destinations of attributes whose key matches ``pattern``.

        Args:
            pattern: Attribute key to match. A trailing ``*`` matches any
                number of characters.
            include: Destinations matching attributes are added to.
            exclude: Destinations matching attributes are removed from.
                Exclusion wins over inclusion.

        Calling this again with the same pattern or-s the new include and
        exclude sets into the existing modifier.
        """
        if not isinstance(pattern, str):
            raise TypeError(f"pattern must be a str, got {type(pattern).__name__}")
        include = Destination.coerce(include)
        exclude = Destination.coerce(exclude)

        rule = self._by_pattern.get(pattern)
        if rule is not None:
            rule.include |= include
            rule.exclude |= exclude
        else:
            rule = MatchRule.from_pattern(pattern, include, exclude)
            self._rules.append(rule)
            self._by_pattern[pattern] = rule
            self._sorted = None

        logger.debug(
            f"Attribute modifier {pattern!r}: include={rule.include!r} exclude={rule.exclude!r}"
        )

    def rules_by_specificity(self) -> tuple[MatchRule, ...]:
        """Rules ordered from most to least specific (stable for equal specificity)."""
        if self._sorted is None:
            self._sorted = tuple(
                sorted(self._rules, key=lambda rule: rule.specificity, reverse=True)
            )
        return self._sorted

    def destroy(self) -> None:
        """Release all modifiers. Disabled destinations are kept."""
        self._rules.clear()
        self._by_pattern.clear()
        self._sorted = None


__all__ = [
    "AttributeConfig",
    "MatchRule",
    "WILDCARD",
]
