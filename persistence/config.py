from __future__ import annotations

import logging

from settings import Settings

from .interfaces import ShopDatabase
from .memory_db import MemoryShopDatabase

logger = logging.getLogger(__name__)

BACKENDS = ("memory", "mongo", "datastore")


def configure_db(settings: Settings) -> ShopDatabase:
    """
    Build the ShopDatabase selected by `settings.shop_backend`.

    Backend libraries are imported only when selected, so a memory-only setup
    never touches Mongo or Google Cloud.
    """
    backend = settings.shop_backend
    logger.info("SHOP DB: using %s backend", backend)

    if backend == "memory":
        return MemoryShopDatabase()

    if backend == "mongo":
        from .mongo_db import MongoShopDatabase

        creds = None
        if settings.mongo_username and settings.mongo_password:
            creds = (settings.mongo_username, settings.mongo_password)
        return MongoShopDatabase(settings.mongo_addr, creds, database=settings.mongo_database)

    if backend == "datastore":
        from .datastore_db import configure_datastore_db

        if not settings.datastore_project_id:
            raise ValueError("DATASTORE_PROJECT_ID is required for the datastore backend")
        return configure_datastore_db(settings.datastore_project_id)

    raise ValueError(f"unknown SHOP_BACKEND {backend!r} (expected one of {', '.join(BACKENDS)})")
