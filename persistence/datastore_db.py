from __future__ import annotations

import logging
from typing import Iterable

from google.api_core.exceptions import GoogleAPIError
from google.auth.exceptions import GoogleAuthError
from google.cloud import datastore
from google.cloud.datastore.query import PropertyFilter

from .errors import BackendError, DatabaseConnectionError, NotFoundError, unassigned_id
from .interfaces import ShopDatabase
from .shop import Shop

logger = logging.getLogger(__name__)

NAME = "datastoredb"
KIND = "Shop"

# Long free text would hit Datastore's 1500-byte limit on indexed strings.
UNINDEXED_PROPERTIES = ("description",)

_DATASTORE_ERRORS = (GoogleAPIError, GoogleAuthError)


class DatastoreShopDatabase(ShopDatabase):
    """
    ShopDatabase backed by Cloud Datastore.

    Each shop is one `Shop` entity whose numeric key ID is the shop ID; the ID is
    not repeated among the entity's properties. Inserts use an incomplete key and
    the service assigns the ID.

    Unlike the other backends, updating a shop that does not exist raises
    NotFoundError, and deleting one is a no-op.
    """

    def __init__(self, client: datastore.Client):
        # Verify that we can communicate and authenticate with the service.
        try:
            txn = client.transaction()
            txn.begin()
            txn.rollback()
        except _DATASTORE_ERRORS as e:
            raise DatabaseConnectionError(f"{NAME}: could not connect: {e}") from e
        self._client = client
        logger.info("%s: connected (project=%s)", NAME, getattr(client, "project", None))

    def close(self) -> None:
        # The client holds no resources that need releasing.
        return

    def _key(self, shop_id: int) -> datastore.Key:
        return self._client.key(KIND, shop_id)

    def _entity(self, key: datastore.Key, shop: Shop) -> datastore.Entity:
        entity = datastore.Entity(key=key, exclude_from_indexes=UNINDEXED_PROPERTIES)
        entity.update(shop.properties())
        return entity

    def get_shop(self, shop_id: int) -> Shop:
        # Key IDs start at 1.
        if shop_id <= 0:
            raise NotFoundError(NAME, shop_id)
        try:
            entity = self._client.get(self._key(shop_id))
        except _DATASTORE_ERRORS as e:
            raise self._wrap("get Shop", shop_id, e) from e
        if entity is None:
            raise NotFoundError(NAME, shop_id)
        return _from_entity(entity)

    def add_shop(self, shop: Shop) -> int:
        entity = self._entity(self._client.key(KIND), shop)
        try:
            self._client.put(entity)
        except _DATASTORE_ERRORS as e:
            raise self._wrap("put Shop", None, e) from e
        return entity.key.id

    def delete_shop(self, shop_id: int) -> None:
        if shop_id == 0:
            raise unassigned_id(NAME, "delete_shop")
        try:
            self._client.delete(self._key(shop_id))
        except _DATASTORE_ERRORS as e:
            raise self._wrap("delete Shop", shop_id, e) from e

    def update_shop(self, shop: Shop) -> None:
        if shop.id == 0:
            raise unassigned_id(NAME, "update_shop")
        key = self._key(shop.id)
        try:
            with self._client.transaction():
                if self._client.get(key) is None:
                    raise NotFoundError(NAME, shop.id)
                self._client.put(self._entity(key, shop))
        except _DATASTORE_ERRORS as e:
            raise self._wrap("update Shop", shop.id, e) from e

    def list_shops(self) -> list[Shop]:
        return self._query([])

    def list_shops_created_by(self, user_id: str) -> list[Shop]:
        if not user_id:
            return self.list_shops()
        return self._query([PropertyFilter("created_by_id", "=", user_id)])

    def list_shops_by_category(self, category: str) -> list[Shop]:
        if not category:
            return self.list_shops()
        return self._query([PropertyFilter("category", "=", category)])

    def _query(self, filters: Iterable[PropertyFilter]) -> list[Shop]:
        query = self._client.query(kind=KIND, filters=list(filters), order=["title"])
        try:
            return [_from_entity(e) for e in query.fetch()]
        except _DATASTORE_ERRORS as e:
            raise self._wrap("list shops", None, e) from e

    @staticmethod
    def _wrap(op: str, shop_id: int | None, err: Exception) -> BackendError:
        logger.warning("%s: %s failed (id=%s): %r", NAME, op, shop_id, err)
        return BackendError(NAME, op, shop_id, err)


def _from_entity(entity: datastore.Entity) -> Shop:
    # The stored properties don't carry the ID; it lives on the key.
    shop = Shop.model_validate(dict(entity))
    shop.id = entity.key.id
    return shop


def configure_datastore_db(project_id: str) -> DatastoreShopDatabase:
    try:
        client = datastore.Client(project=project_id)
    except _DATASTORE_ERRORS as e:
        raise DatabaseConnectionError(f"{NAME}: could not create client: {e}") from e
    return DatastoreShopDatabase(client)
