"""
Attribute Destinations
======================

Every attribute carries the set of telemetry data types it is attached
to. These data types are called destinations and are represented as bit
flags so that sets can be combined cheaply::

    Destination.TXN_EVENT | Destination.ERROR

The bit values are fixed: ``NONE=0``, ``TXN_EVENT=1``, ``TXN_TRACE=2``,
``ERROR=4``, ``BROWSER=8`` and ``ALL=15``.
"""

from __future__ import annotations

import enum
from typing import Iterable, Union

from agentattrs.errors import InvalidDestinationError


class Destination(enum.IntFlag):
    """Set of telemetry data types an attribute is attached to."""

    NONE = 0
    TXN_EVENT = 1
    TXN_TRACE = 2
    ERROR = 4
    BROWSER = 8
    ALL = TXN_EVENT | TXN_TRACE | ERROR | BROWSER

    @classmethod
    def coerce(cls, value: Union["Destination", int]) -> "Destination":
        """
        Convert an integer bitmask into a Destination.

        Raises:
            InvalidDestinationError: if ``value`` is not an integer or
                carries bits outside ``Destination.ALL``.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidDestinationError(
                f"Destinations must be an integer bitmask, got {type(value).__name__}"
            )
        if value < 0 or value & ~int(cls.ALL):
            raise InvalidDestinationError(
                f"Destination bitmask {value!r} has bits outside ALL ({int(cls.ALL)})"
            )
        return cls(value)

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "Destination":
        """
        Build a Destination from setting names such as ``"error_collector"``.

        Member names (``"TXN_EVENT"``) are accepted as well. Lookup is
        case-insensitive.
        """
        result = cls.NONE
        for name in names:
            key = name.strip().lower()
            if not key:
                continue
            flag = _NAME_ALIASES.get(key)
            if flag is None:
                raise InvalidDestinationError(f"Unknown destination name: {name!r}")
            result |= flag
        return result

    def without(self, other: Union["Destination", int]) -> "Destination":
        """Return the destinations in ``self`` that are not in ``other``."""
        return Destination(int(self) & ~int(other) & int(Destination.ALL))

    def intersects(self, other: Union["Destination", int]) -> bool:
        return bool(int(self) & int(other))


_NAME_ALIASES: dict[str, Destination] = {
    "none": Destination.NONE,
    "txn_event": Destination.TXN_EVENT,
    "transaction_events": Destination.TXN_EVENT,
    "txn_trace": Destination.TXN_TRACE,
    "transaction_tracer": Destination.TXN_TRACE,
    "error": Destination.ERROR,
    "error_collector": Destination.ERROR,
    "browser": Destination.BROWSER,
    "browser_monitoring": Destination.BROWSER,
    "all": Destination.ALL,
}


__all__ = ["Destination"]
