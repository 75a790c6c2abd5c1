"""FastAPI dependencies for shared services."""
from __future__ import annotations

import logging

from fastapi import Request

from .config import STORE_BACKEND
from .db import init_db
from .services import InMemoryTeacherStore, SqlTeacherStore, TeacherStore

LOGGER = logging.getLogger(__name__)


def build_store(backend: str = STORE_BACKEND) -> TeacherStore:
    """Instantiate the configured store backend."""
    if backend == "memory":
        LOGGER.info("Using in-memory teacher store")
        return InMemoryTeacherStore()
    if backend == "sql":
        init_db()
        LOGGER.info("Using SQL teacher store")
        return SqlTeacherStore()
    raise ValueError(f"Unknown teacher store backend: {backend!r}")


def get_store(request: Request) -> TeacherStore:
    """Return the store attached to the running application."""

    return request.app.state.store
