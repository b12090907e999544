import pytest
from fastapi.testclient import TestClient

from medref_api.app.main import create_app
from medref_api.app.services.memory_storage import MemoryStorage
from medref_api.app.services.sqlite_storage import SQLiteStorage

from tests.helpers import run


@pytest.fixture(params=["memory", "sqlite"])
def storage(request, tmp_path):
    """Each store contract test runs against both backends."""
    if request.param == "memory":
        return MemoryStorage()
    return SQLiteStorage.open(str(tmp_path / "medref.db"))


@pytest.fixture
def seeded_storage(storage):
    run(storage.seed_sample_data())
    return storage


@pytest.fixture
def client(seeded_storage):
    return TestClient(create_app(storage=seeded_storage))


@pytest.fixture
def empty_client(storage):
    return TestClient(create_app(storage=storage))
