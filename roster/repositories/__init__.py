"""
Persistence adapters.

Every entity kind lives in one JSON array stored under a single blob key.
Repositories load the whole array, change it in memory and write it back;
services depend on these repositories rather than touching blobs directly.
"""

from .collection_store import CollectionStore, decode_collection, encode_collection
from .entity_repository import EntityRepository, EventRepository, UserRepository

__all__ = [
    "CollectionStore",
    "EntityRepository",
    "EventRepository",
    "UserRepository",
    "decode_collection",
    "encode_collection",
]
