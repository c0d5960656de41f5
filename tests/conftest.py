# /tests/conftest.py

import pytest
import pytest_asyncio

from homework_tracker.services.database_helpers.homework_repository_memory import HomeworkRepositoryMemory
from homework_tracker.services.database_helpers.homework_repository_sql import HomeworkRepositorySQL
from homework_tracker.services.database_helpers.snapshot_store import FileSnapshotStore


@pytest.fixture
def snapshot_store(tmp_path):
    """A snapshot slot store redirected to a temporary directory."""
    return FileSnapshotStore(tmp_path / "data")


@pytest.fixture
def sqlite_url(tmp_path):
    return f"sqlite:///{tmp_path / 'homework_test.db'}"


@pytest_asyncio.fixture
async def relational_storage(sqlite_url):
    """A NEW, EMPTY relational backend for each test function."""
    storage = HomeworkRepositorySQL(sqlite_url, seed_sample_data=False)
    await storage.initialize()
    yield storage
    await storage.close()


@pytest.fixture
def ephemeral_storage(snapshot_store):
    """A NEW, EMPTY ephemeral backend for each test function."""
    return HomeworkRepositoryMemory(snapshot_store, seed_sample_data=False)


@pytest_asyncio.fixture(params=["relational", "ephemeral"])
async def storage(request, sqlite_url, snapshot_store):
    """
    Runs the test once against each backend; both must satisfy the same
    storage contract.
    """
    if request.param == "relational":
        backend = HomeworkRepositorySQL(sqlite_url, seed_sample_data=False)
        await backend.initialize()
    else:
        backend = HomeworkRepositoryMemory(snapshot_store, seed_sample_data=False)
    yield backend
    await backend.close()
