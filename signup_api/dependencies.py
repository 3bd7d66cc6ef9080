"""
Dependency wiring for the FastAPI app.
"""

from __future__ import annotations

import logging
import threading

from signup_api.config import get_settings
from signup_api.db import DbClient, InMemoryDbClient, PostgresDbClient

logger = logging.getLogger(__name__)

_db_client: DbClient | None = None
_db_client_lock = threading.Lock()


def get_db_client() -> DbClient:
    """
    Return a singleton DB client so the connection pool is reused across requests.

    The client is built on first use. If the datastore is unreachable the
    error propagates and the next request tries again.
    """
    global _db_client
    if _db_client is not None:
        return _db_client

    with _db_client_lock:
        # Another thread may have built it while we waited.
        if _db_client is not None:
            return _db_client

        settings = get_settings()
        if settings.use_in_memory_backends or not settings.database_url:
            logger.info("Using in-memory user store")
            _db_client = InMemoryDbClient()
        else:
            _db_client = PostgresDbClient(
                settings.database_url, pool_recycle=settings.database_pool_recycle
            )
        return _db_client


def reset_db_client() -> None:
    """Drop the cached client; the next call to get_db_client rebuilds it."""
    global _db_client
    with _db_client_lock:
        _db_client = None
