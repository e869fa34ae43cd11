from __future__ import annotations

import logging
from typing import Any, Mapping

from pymongo import ASCENDING, MongoClient
from pymongo.errors import DuplicateKeyError, PyMongoError

from .errors import BackendError, DatabaseConnectionError, NotFoundError, unassigned_id
from .helpers import random_id
from .interfaces import ShopDatabase
from .shop import Shop

logger = logging.getLogger(__name__)

NAME = "mongodb"

# Random 63-bit IDs practically never collide, but a unique index makes the
# rare collision a retry instead of a silently shared ID.
MAX_ID_ATTEMPTS = 5

_NO_MONGO_ID = {"_id": False}


class MongoShopDatabase(ShopDatabase):
    """
    ShopDatabase backed by a MongoDB collection.

    IDs are generated in-process (random positive 63-bit integers) and stored in
    an `id` field; Mongo's own `_id` never leaves this class.
    """

    def __init__(
        self,
        addr: str,
        credentials: tuple[str, str] | None = None,
        *,
        database: str = "shopplace",
        collection: str = "shops",
        client: Any | None = None,
    ):
        if client is None:
            kwargs: dict[str, Any] = {}
            if credentials is not None:
                kwargs["username"], kwargs["password"] = credentials
            try:
                client = MongoClient(addr, **kwargs)
            except PyMongoError as e:
                raise DatabaseConnectionError(f"{NAME}: could not dial {addr}: {e}") from e

        try:
            # MongoClient connects lazily; force one round trip so a bad address or
            # bad credentials fail here rather than on first use.
            client.server_info()
            coll = client[database][collection]
            coll.create_index([("id", ASCENDING)], unique=True)
        except PyMongoError as e:
            client.close()
            raise DatabaseConnectionError(f"{NAME}: could not connect to {addr}: {e}") from e

        self._client = client
        self._coll = coll
        self._closed = False
        logger.info("%s: connected to %s (%s.%s)", NAME, addr, database, collection)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._client.close()

    def get_shop(self, shop_id: int) -> Shop:
        try:
            doc = self._coll.find_one({"id": shop_id}, _NO_MONGO_ID)
        except PyMongoError as e:
            raise self._wrap("get shop", shop_id, e) from e
        if doc is None:
            raise NotFoundError(NAME, shop_id)
        return _from_doc(doc)

    def add_shop(self, shop: Shop) -> int:
        for _ in range(MAX_ID_ATTEMPTS):
            shop_id = random_id()
            doc = shop.model_dump()
            doc["id"] = shop_id
            try:
                self._coll.insert_one(doc)
            except DuplicateKeyError:
                logger.warning("%s: random ID %d already taken, retrying", NAME, shop_id)
                continue
            except PyMongoError as e:
                raise self._wrap("add shop", None, e) from e
            return shop_id
        raise BackendError(NAME, "assign a new ID", reason=f"{MAX_ID_ATTEMPTS} collisions in a row")

    def delete_shop(self, shop_id: int) -> None:
        if shop_id == 0:
            raise unassigned_id(NAME, "delete_shop")
        try:
            result = self._coll.delete_one({"id": shop_id})
        except PyMongoError as e:
            raise self._wrap("delete shop", shop_id, e) from e
        if result.deleted_count == 0:
            raise NotFoundError(NAME, shop_id)

    def update_shop(self, shop: Shop) -> None:
        if shop.id == 0:
            raise unassigned_id(NAME, "update_shop")
        try:
            self._coll.replace_one({"id": shop.id}, shop.model_dump(), upsert=True)
        except PyMongoError as e:
            raise self._wrap("update shop", shop.id, e) from e

    def list_shops(self) -> list[Shop]:
        return self._find({})

    def list_shops_created_by(self, user_id: str) -> list[Shop]:
        if not user_id:
            return self.list_shops()
        return self._find({"created_by_id": user_id})

    def list_shops_by_category(self, category: str) -> list[Shop]:
        if not category:
            return self.list_shops()
        return self._find({"category": category})

    def _find(self, query: Mapping[str, Any]) -> list[Shop]:
        try:
            cursor = self._coll.find(query, _NO_MONGO_ID).sort("title", ASCENDING)
            return [_from_doc(doc) for doc in cursor]
        except PyMongoError as e:
            raise self._wrap("list shops", None, e) from e

    @staticmethod
    def _wrap(op: str, shop_id: int | None, err: PyMongoError) -> BackendError:
        logger.warning("%s: %s failed (id=%s): %r", NAME, op, shop_id, err)
        return BackendError(NAME, op, shop_id, err)


def _from_doc(doc: Mapping[str, Any]) -> Shop:
    return Shop.model_validate(dict(doc))
