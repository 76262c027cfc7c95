"""
Destination resolution.

Computes the final destinations of an attribute from its default
destinations and an :class:`~agentattrs.config.AttributeConfig`:

1. Find the modifiers matching the key.
2. Keep only the most specific ones (longest literal prefix); when several
   share that specificity their include and exclude sets are or-ed.
3. ``(default | include) - exclude``
4. ``- disabled``

So disabled destinations beat everything, exclude beats include, and a
more specific modifier beats a less specific one regardless of the
order the modifiers were configured in.
"""

from __future__ import annotations

from typing import Union

from agentattrs.config import AttributeConfig
from agentattrs.destinations import Destination


def resolve(
    key: str,
    default_destinations: Union[Destination, int],
    config: AttributeConfig,
) -> Destination:
    result = Destination.coerce(default_destinations)
    include = Destination.NONE
    exclude = Destination.NONE

    best = -1
    for rule in config.rules_by_specificity():
        if best >= 0 and rule.specificity < best:
            break
        if rule.matches(key):
            best = rule.specificity
            include |= rule.include
            exclude |= rule.exclude

    result = (result | include).without(exclude)
    return result.without(config.disabled)


__all__ = ["resolve"]
