from __future__ import annotations

import pytest
from google.api_core import exceptions as gexc

from fakes import FakeDatastoreClient
from persistence import BackendError, DatabaseConnectionError, NotFoundError, Shop
from persistence.datastore_db import KIND, DatastoreShopDatabase


def test_construction_probes_with_a_transaction(datastore_client):
    DatastoreShopDatabase(datastore_client)
    assert datastore_client.transactions_begun == 1
    assert datastore_client.transactions_rolled_back == 1


def test_construction_fails_when_unreachable():
    client = FakeDatastoreClient(connect_error=gexc.PermissionDenied("bad credentials"))
    with pytest.raises(DatabaseConnectionError) as ei:
        DatastoreShopDatabase(client)
    assert "bad credentials" in str(ei.value)


def test_ids_come_from_the_service(datastore_db, datastore_client):
    shop_id = datastore_db.add_shop(Shop(title="t"))
    assert (KIND, shop_id) in datastore_client.entities


def test_id_lives_on_the_key_only(datastore_db, datastore_client):
    shop_id = datastore_db.add_shop(Shop(title="t", description="long text"))
    props = datastore_client.entities[(KIND, shop_id)]
    assert "id" not in props
    assert props["title"] == "t"
    assert "description" in datastore_client.exclusions[(KIND, shop_id)]


def test_update_missing_is_not_found(datastore_db, datastore_client):
    with pytest.raises(NotFoundError):
        datastore_db.update_shop(Shop(id=77, title="nope"))
    assert datastore_client.entities == {}


def test_delete_missing_is_a_noop(datastore_db):
    datastore_db.delete_shop(12)


def test_list_created_by_sorted(datastore_db):
    for title, uid in [("Zeta", "u1"), ("Alpha", "u2"), ("Mu", "u1")]:
        datastore_db.add_shop(Shop(title=title, created_by_id=uid))
    assert [s.title for s in datastore_db.list_shops_created_by("u1")] == ["Mu", "Zeta"]


def test_store_failures_are_wrapped(datastore_db, datastore_client):
    shop_id = datastore_db.add_shop(Shop(title="t"))
    datastore_client.fail_with = gexc.ServiceUnavailable("down")

    with pytest.raises(BackendError) as ei:
        datastore_db.get_shop(shop_id)
    assert ei.value.shop_id == shop_id
    assert isinstance(ei.value.__cause__, gexc.ServiceUnavailable)

    with pytest.raises(BackendError):
        datastore_db.list_shops()
    with pytest.raises(BackendError):
        datastore_db.update_shop(Shop(id=shop_id, title="u"))

    with pytest.raises(BackendError) as ei:
        datastore_db.delete_shop(shop_id)
    assert ei.value.op == "delete Shop"
    with pytest.raises(BackendError) as ei:
        datastore_db.add_shop(Shop(title="new"))
    assert ei.value.op == "put Shop"
    assert ei.value.shop_id is None
    assert list(datastore_client.entities) == [(KIND, shop_id)]


def test_get_non_positive_id_is_not_found(datastore_db, datastore_client):
    datastore_client.fail_with = gexc.InvalidArgument("key id must be positive")
    for shop_id in (0, -3):
        with pytest.raises(NotFoundError):
            datastore_db.get_shop(shop_id)
