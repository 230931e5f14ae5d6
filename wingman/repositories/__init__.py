"""
Persistence adapters.

A backing store only knows how to get/set text under a key (memory, JSON file
or SQL table). Collections layer the typed codec and CRUD helpers on top, and
``Storage`` groups the three collections with the cascading exercise delete.
Services and routers depend on ``Storage`` rather than touching a store.
"""

from .errors import (
    BackingStoreError,
    CascadeError,
    DecodeError,
    NotFoundError,
    PersistenceError,
    StorageError,
    WriteError,
)
from .storage import Storage, create_store

__all__ = [
    "BackingStoreError",
    "CascadeError",
    "DecodeError",
    "NotFoundError",
    "PersistenceError",
    "Storage",
    "StorageError",
    "WriteError",
    "create_store",
]
