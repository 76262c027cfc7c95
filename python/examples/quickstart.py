"""agentattrs Quickstart — pip install agentattrs"""

from agentattrs import AttributeConfig, AttributeStore, Destination

# Build the routing policy once (like loading agent settings)
config = AttributeConfig()
config.disable_destinations(Destination.ERROR)
config.modify_destinations("request.headers.*", Destination.NONE, Destination.ALL)
config.modify_destinations("request.*", Destination.BROWSER, Destination.NONE)

# One store per transaction
store = AttributeStore(config)
store.agent_add_string(Destination.ALL, "request.headers.cookie", "session=abc")
store.agent_add_string(Destination.TXN_EVENT | Destination.TXN_TRACE, "request.uri", "/checkout")
store.user_add(Destination.ALL, "customer.tier", "gold")

print(f"browser: {store.agent_to_obj(Destination.BROWSER)}")
print(f"errors:  {store.user_to_obj(Destination.ERROR)}")
