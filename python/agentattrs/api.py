"""
Functional interface.

Plain functions over :class:`AttributeConfig` and :class:`AttributeStore`
for callers that prefer a procedural surface::

    config = create_config()
    disable_destinations(config, Destination.ERROR)
    modify_destinations(config, "request.*", Destination.BROWSER, Destination.NONE)

    store = create_store(config)
    user_add(store, Destination.TXN_EVENT, "request.uri", "/x")
    user_to_obj(store, Destination.BROWSER)   # {"request.uri": "/x"}
"""

from __future__ import annotations

from typing import Any, Union

from agentattrs.config import AttributeConfig
from agentattrs.destinations import Destination
from agentattrs.store import AttributeStore, Outcome
from agentattrs.values import Scalar

Destinations = Union[Destination, int]


def create_config() -> AttributeConfig:
    return AttributeConfig()


def disable_destinations(config: AttributeConfig, destinations: Destinations) -> None:
    config.disable_destinations(destinations)


def modify_destinations(
    config: AttributeConfig,
    pattern: str,
    include: Destinations,
    exclude: Destinations,
) -> None:
    config.modify_destinations(pattern, include, exclude)


def destroy_config(config: AttributeConfig) -> None:
    config.destroy()


def create_store(config: AttributeConfig) -> AttributeStore:
    return AttributeStore(config)


def user_add(store: AttributeStore, default_destinations: Destinations, key: str, value: Any) -> Outcome:
    return store.user_add(default_destinations, key, value)


def agent_add_long(store: AttributeStore, default_destinations: Destinations, key: str, value: int) -> Outcome:
    return store.agent_add_long(default_destinations, key, value)


def agent_add_string(store: AttributeStore, default_destinations: Destinations, key: str, value: str) -> Outcome:
    return store.agent_add_string(default_destinations, key, value)


def user_to_obj(store: AttributeStore, destinations: Destinations) -> dict[str, Scalar]:
    return store.user_to_obj(destinations)


def agent_to_obj(store: AttributeStore, destinations: Destinations) -> dict[str, Scalar]:
    return store.agent_to_obj(destinations)


def destroy_store(store: AttributeStore) -> None:
    store.destroy()


__all__ = [
    "create_config",
    "disable_destinations",
    "modify_destinations",
    "destroy_config",
    "create_store",
    "user_add",
    "agent_add_long",
    "agent_add_string",
    "user_to_obj",
    "agent_to_obj",
    "destroy_store",
]
