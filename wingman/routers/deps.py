"""Request-scoped accessors for objects configured on app.state."""
from __future__ import annotations

from fastapi import Request

from wingman.repositories.storage import Storage


def get_storage(request: Request) -> Storage:
    storage = getattr(getattr(request.app, "state", None), "storage", None)
    if not storage:
        raise RuntimeError("Storage not configured")
    return storage
