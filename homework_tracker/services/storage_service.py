# /homework-tracker/homework_tracker/services/storage_service.py

"""
Backend selection for the storage contract.

The choice is made once, at application startup: the ephemeral backend in
the web context, the relational backend everywhere else. If the relational
backend cannot be initialized, the failure is logged and the ephemeral
backend is used instead, so the application is never left without storage.
The selected instance is held by the application (see `main.lifespan`) and
handed to routers through the `get_storage` dependency.
"""

import logging

from fastapi import Request

from ..config import Settings
from ..core.exceptions import BackendUnavailableError
from .database_helpers.homework_repository_memory import HomeworkRepositoryMemory
from .database_helpers.homework_repository_sql import HomeworkRepositorySQL
from .database_helpers.snapshot_store import FileSnapshotStore
from .storage_contract import HomeworkStorage

logger = logging.getLogger(__name__)


def build_ephemeral_storage(settings: Settings) -> HomeworkRepositoryMemory:
    return HomeworkRepositoryMemory(
        FileSnapshotStore(settings.snapshot_dir),
        seed_sample_data=settings.seed_sample_data,
    )


async def build_relational_storage(settings: Settings) -> HomeworkRepositorySQL:
    storage = HomeworkRepositorySQL(settings.database_url, seed_sample_data=settings.seed_sample_data)
    await storage.initialize()
    return storage


async def select_storage(settings: Settings) -> HomeworkStorage:
    """
    Builds the storage backend for this process.

    Args:
        settings: The runtime settings; `web_mode` picks the backend.

    Returns:
        A ready-to-use backend. Relational initialization failures never
        escape this function; they turn into the ephemeral fallback.
    """
    if settings.web_mode:
        logger.info("Web context detected, using ephemeral storage")
        return build_ephemeral_storage(settings)

    try:
        return await build_relational_storage(settings)
    except BackendUnavailableError as e:
        logger.warning("Relational storage unavailable, falling back to ephemeral storage: %s", e)
        return build_ephemeral_storage(settings)


# --- Dependency Provider ---

def get_storage(request: Request) -> HomeworkStorage:
    """
    FastAPI dependency that provides the backend selected at startup.
    """
    return request.app.state.storage
