from __future__ import annotations

import logging

from prompthub.config import Settings
from prompthub.database.database import create_engine_for
from prompthub.storage.fallback_storage import SeedFallbackStorage
from prompthub.storage.memory_storage import MemStorage
from prompthub.storage.sql_storage import SqlStorage
from prompthub.storage.storage import Storage

logger = logging.getLogger(__name__)


def build_storage(settings: Settings) -> Storage:
    """Construct the storage the app runs on; called once per process."""
    if settings.storage_backend == "memory":
        logger.info("Using in-memory storage")
        return MemStorage(seed=True)

    storage: Storage = SqlStorage(
        create_engine_for(settings.database_url),
        retry_attempts=settings.storage_retry_attempts,
    )
    logger.info("Using SQL storage")
    if settings.seed_fallback_on_storage_error:
        logger.warning("Seed fallback enabled: catalog reads will be served from seed data if the database is down")
        storage = SeedFallbackStorage(storage)
    return storage


def sql_storage_of(storage: Storage) -> SqlStorage | None:
    if isinstance(storage, SeedFallbackStorage):
        storage = storage.primary
    return storage if isinstance(storage, SqlStorage) else None
