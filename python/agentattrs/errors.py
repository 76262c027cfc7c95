"""
Exceptions raised by agentattrs.

Adding an attribute never raises: rejected adds are reported through
:class:`agentattrs.store.Outcome`. These exceptions signal programming
errors such as a destination bitmask outside ``Destination.ALL``.
"""


class AgentAttrsError(ValueError):
    """Base class for all agentattrs errors."""


class InvalidDestinationError(AgentAttrsError):
    """Raised when a value cannot be interpreted as a destination set."""


class UnsupportedValueError(AgentAttrsError):
    """Raised when a Python object cannot be held as an attribute value."""


class SettingsError(AgentAttrsError):
    """Raised when attribute settings cannot be parsed."""


__all__ = [
    "AgentAttrsError",
    "InvalidDestinationError",
    "UnsupportedValueError",
    "SettingsError",
]
