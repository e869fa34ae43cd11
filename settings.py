from __future__ import annotations

import os
from dataclasses import dataclass


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    # Which ShopDatabase to build: "memory", "mongo" or "datastore"
    shop_backend: str = "memory"

    # Mongo
    mongo_addr: str = "mongodb://localhost:27017"
    mongo_username: str = ""
    mongo_password: str = ""
    mongo_database: str = "shopplace"

    # Cloud Datastore
    datastore_project_id: str = ""

    # Logging / debug
    log_level: str = "INFO"
    debug_log_requests: bool = False


def get_settings() -> Settings:
    shop_backend = os.getenv("SHOP_BACKEND", "memory").strip().lower()

    mongo_addr = os.getenv("MONGO_ADDR", "mongodb://localhost:27017")
    mongo_username = os.getenv("MONGO_USERNAME", "")
    # NOTE: only used when MONGO_USERNAME is also set
    mongo_password = os.getenv("MONGO_PASSWORD", "")
    mongo_database = os.getenv("MONGO_DATABASE", "shopplace")

    datastore_project_id = os.getenv("DATASTORE_PROJECT_ID", "").strip()

    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    debug_log_requests = _env_bool("DEBUG_LOG_REQUESTS", False)

    return Settings(
        shop_backend=shop_backend,
        mongo_addr=mongo_addr,
        mongo_username=mongo_username,
        mongo_password=mongo_password,
        mongo_database=mongo_database,
        datastore_project_id=datastore_project_id,
        log_level=log_level,
        debug_log_requests=debug_log_requests,
    )
