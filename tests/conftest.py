from __future__ import annotations

from pathlib import Path
import sys


import mongomock
import pytest


# Ensure the repository root (parent of ./tests) is importable during pytest collection.
# This avoids ModuleNotFoundError for imports like `import persistence...` under pytest import modes
# that don't automatically prepend the cwd/rootdir to sys.path.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))
TESTS_DIR = Path(__file__).resolve().parent
if str(TESTS_DIR) not in sys.path:
    sys.path.insert(0, str(TESTS_DIR))


@pytest.fixture
def memory_db():
    from persistence.memory_db import MemoryShopDatabase

    db = MemoryShopDatabase()
    yield db
    db.close()


@pytest.fixture
def mongo_db():
    from persistence.mongo_db import MongoShopDatabase

    db = MongoShopDatabase("mongodb://unused", client=mongomock.MongoClient())
    yield db
    db.close()


@pytest.fixture
def datastore_client():
    from fakes import FakeDatastoreClient

    return FakeDatastoreClient()


@pytest.fixture
def datastore_db(datastore_client):
    from persistence.datastore_db import DatastoreShopDatabase

    db = DatastoreShopDatabase(datastore_client)
    yield db
    db.close()


@pytest.fixture(params=["memory", "mongo", "datastore"])
def db(request):
    """Every ShopDatabase implementation, for backend-agnostic properties."""
    return request.getfixturevalue(f"{request.param}_db")


@pytest.fixture
def client():
    from fastapi.testclient import TestClient

    import app as app_module
    from settings import Settings

    return TestClient(app_module.create_app(Settings()))
