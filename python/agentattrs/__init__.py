"""
agentattrs — attribute destination routing
==========================================

Decides which key/value attributes collected by an instrumentation agent
are attached to which telemetry data types ("destinations"): transaction
events, transaction traces, errors and browser payloads.

Quick Start::

    from agentattrs import AttributeConfig, AttributeStore, Destination

    # Build the routing policy once
    config = AttributeConfig()
    config.disable_destinations(Destination.ERROR)
    config.modify_destinations("request.*", Destination.BROWSER, Destination.NONE)

    # One store per unit of work
    store = AttributeStore(config)
    store.user_add(Destination.TXN_EVENT, "request.uri", "/x")

    store.user_to_obj(Destination.BROWSER)   # {"request.uri": "/x"}
    store.user_to_obj(Destination.ERROR)     # {}

Routing rules:
  - Disabled destinations never receive attributes.
  - Exclude beats include.
  - A more specific key pattern beats a less specific one.

What agentattrs does NOT do:
  - Decide what telemetry is collected
  - Send, serialize, or persist anything
"""

# ── Policy ────────────────────────────────────────────────────────────

from agentattrs.destinations import Destination
from agentattrs.config import AttributeConfig, MatchRule
from agentattrs.resolver import resolve

# ── Storage ───────────────────────────────────────────────────────────

from agentattrs.values import AttributeValue, ValueType
from agentattrs.store import (
    Attribute,
    AttributeStore,
    Origin,
    Outcome,
    KEY_LENGTH_LIMIT,
    VALUE_LENGTH_LIMIT,
    USER_ATTRIBUTE_LIMIT,
)

# ── Settings & errors ─────────────────────────────────────────────────

from agentattrs.settings import AttributeSettings, DestinationSettings
from agentattrs.errors import (
    AgentAttrsError,
    InvalidDestinationError,
    UnsupportedValueError,
    SettingsError,
)

# ── Functional interface ──────────────────────────────────────────────

from agentattrs.api import (
    create_config,
    disable_destinations,
    modify_destinations,
    destroy_config,
    create_store,
    user_add,
    agent_add_long,
    agent_add_string,
    user_to_obj,
    agent_to_obj,
    destroy_store,
)

# ── OpenTelemetry bridge ──────────────────────────────────────────────

from agentattrs.instrumentor import AttributeInstrumentor

__version__ = "1.0.0"
__all__ = [
    # ── Policy ──
    "Destination",
    "AttributeConfig",
    "MatchRule",
    "resolve",
    # ── Storage ──
    "AttributeValue",
    "ValueType",
    "Attribute",
    "AttributeStore",
    "Origin",
    "Outcome",
    "KEY_LENGTH_LIMIT",
    "VALUE_LENGTH_LIMIT",
    "USER_ATTRIBUTE_LIMIT",
    # ── Settings & errors ──
    "AttributeSettings",
    "DestinationSettings",
    "AgentAttrsError",
    "InvalidDestinationError",
    "UnsupportedValueError",
    "SettingsError",
    # ── Functional interface ──
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
    # ── OpenTelemetry bridge ──
    "AttributeInstrumentor",
]
