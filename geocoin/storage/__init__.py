"""Key-value stores and player persistence."""

from geocoin.storage.kv import InMemoryStore, JsonFileStore, KeyValueStore, open_store
from geocoin.storage.persistence import PlayerRecord, PlayerStore, hydrate

__all__ = [
    "InMemoryStore",
    "JsonFileStore",
    "KeyValueStore",
    "PlayerRecord",
    "PlayerStore",
    "hydrate",
    "open_store",
]
