import mongomock
import pytest
from fastapi.testclient import TestClient

from memo_board.core import rate_limit
from memo_board.core.config import settings
from memo_board.infrastructure.db import mongo
from memo_board.infrastructure.storage.local_storage import LocalStorage, MemoryStorage


@pytest.fixture(autouse=True)
def jwt_secret(monkeypatch):
    secret = "tests-only-secret-with-enough-length-for-hs256"
    monkeypatch.setattr(settings, "jwt_secret", secret)
    return secret


@pytest.fixture()
def db():
    database = mongomock.MongoClient()["memo_board_test"]
    database["user"].create_index([("email", 1)], unique=True, name="uniq_email")
    mongo.set_db(database)
    rate_limit.reset()
    yield database
    mongo.set_db(None)
    rate_limit.reset()


@pytest.fixture()
def client(db):
    from memo_board.main import app

    return TestClient(app)


@pytest.fixture()
def storage(tmp_path):
    return LocalStorage(tmp_path / "storage.json")


@pytest.fixture()
def memory_storage():
    return MemoryStorage()
