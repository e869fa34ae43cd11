from __future__ import annotations

import logging
import threading

from .errors import BackendError, NotFoundError, unassigned_id
from .helpers import sort_by_title
from .interfaces import ShopDatabase
from .shop import Shop

logger = logging.getLogger(__name__)

NAME = "memorydb"


class MemoryShopDatabase(ShopDatabase):
    """
    Simple in-memory persistence layer for shops, for tests and local development.

    - One lock serializes every read and write.
    - IDs come from a process-local counter starting at 1.
    - Stores and returns copies, so callers never share state with the store.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._next_id = 1
        self._shops: dict[int, Shop] | None = {}

    def _require_open(self) -> dict[int, Shop]:
        # Caller must hold self._lock.
        if self._shops is None:
            raise BackendError(NAME, "use database", reason="database is closed")
        return self._shops

    def close(self) -> None:
        with self._lock:
            if self._shops is not None:
                logger.info("%s: closing (%d shops dropped)", NAME, len(self._shops))
            self._shops = None

    def get_shop(self, shop_id: int) -> Shop:
        with self._lock:
            shop = self._require_open().get(shop_id)
            if shop is None:
                raise NotFoundError(NAME, shop_id)
            return shop.model_copy()

    def add_shop(self, shop: Shop) -> int:
        with self._lock:
            shops = self._require_open()
            shop_id = self._next_id
            self._next_id += 1
            shops[shop_id] = shop.model_copy(update={"id": shop_id})
            return shop_id

    def delete_shop(self, shop_id: int) -> None:
        if shop_id == 0:
            raise unassigned_id(NAME, "delete_shop")

        with self._lock:
            shops = self._require_open()
            if shop_id not in shops:
                raise NotFoundError(NAME, shop_id)
            del shops[shop_id]

    def update_shop(self, shop: Shop) -> None:
        if shop.id == 0:
            raise unassigned_id(NAME, "update_shop")

        with self._lock:
            self._require_open()[shop.id] = shop.model_copy()
            # An upsert may use an ID the counter has not reached yet.
            self._next_id = max(self._next_id, shop.id + 1)

    def list_shops(self) -> list[Shop]:
        with self._lock:
            return self._collect(lambda s: True)

    def list_shops_created_by(self, user_id: str) -> list[Shop]:
        if not user_id:
            return self.list_shops()
        with self._lock:
            return self._collect(lambda s: s.created_by_id == user_id)

    def list_shops_by_category(self, category: str) -> list[Shop]:
        if not category:
            return self.list_shops()
        with self._lock:
            return self._collect(lambda s: s.category == category)

    def _collect(self, keep) -> list[Shop]:
        # Caller must hold self._lock. Walking in ID order makes ties on title
        # come back oldest first.
        shops = self._require_open()
        matched = [shops[k].model_copy() for k in sorted(shops) if keep(shops[k])]
        return sort_by_title(matched)
