"""Port interfaces for fedimigrate.

Ports define the contracts that storage adapters must implement.
The runner and migration steps depend only on these abstractions.
"""

from fedimigrate.ports.store import FollowersPort, KeyValueStorePort, RewriteRulesPort

__all__ = [
    "FollowersPort",
    "KeyValueStorePort",
    "RewriteRulesPort",
]
