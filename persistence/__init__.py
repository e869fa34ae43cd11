from __future__ import annotations

from .errors import (
    BackendError,
    DatabaseConnectionError,
    InvalidArgumentError,
    NotFoundError,
    ShopDatabaseError,
)
from .interfaces import ShopDatabase
from .memory_db import MemoryShopDatabase
from .repositories import AsyncShopRepository
from .shop import ANONYMOUS_CREATOR_ID, Shop

__all__ = [
    "ANONYMOUS_CREATOR_ID",
    "Shop",
    "ShopDatabase",
    "MemoryShopDatabase",
    "AsyncShopRepository",
    "ShopDatabaseError",
    "NotFoundError",
    "InvalidArgumentError",
    "DatabaseConnectionError",
    "BackendError",
]
