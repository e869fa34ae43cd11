from __future__ import annotations

import asyncio
import logging

from .interfaces import ShopDatabase
from .shop import Shop

logger = logging.getLogger(__name__)


class AsyncShopRepository:
    """
    Async wrapper around any ShopDatabase.
    Uses asyncio.to_thread so blocking backend calls don't stall the event loop.
    """

    def __init__(self, db: ShopDatabase, *, debug_log_requests: bool = False) -> None:
        self._db = db
        self._debug = debug_log_requests

    @property
    def db(self) -> ShopDatabase:
        return self._db

    async def _call(self, fn, *args):
        if self._debug:
            logger.debug("SHOP DB: %s%r", fn.__name__, args)
        return await asyncio.to_thread(fn, *args)

    async def list_shops(self) -> list[Shop]:
        return await self._call(self._db.list_shops)

    async def list_shops_created_by(self, user_id: str) -> list[Shop]:
        return await self._call(self._db.list_shops_created_by, user_id)

    async def list_shops_by_category(self, category: str) -> list[Shop]:
        return await self._call(self._db.list_shops_by_category, category)

    async def get_shop(self, shop_id: int) -> Shop:
        return await self._call(self._db.get_shop, shop_id)

    async def add_shop(self, shop: Shop) -> int:
        return await self._call(self._db.add_shop, shop)

    async def delete_shop(self, shop_id: int) -> None:
        await self._call(self._db.delete_shop, shop_id)

    async def update_shop(self, shop: Shop) -> None:
        await self._call(self._db.update_shop, shop)

    async def close(self) -> None:
        await self._call(self._db.close)
