# /homework-tracker/homework_tracker/config.py

"""
Centralized configuration for the homework tracker.

All values come from environment variables (optionally loaded from a `.env`
file). `get_settings()` is called once at startup by the application
lifespan, so the backend choice is fixed for the lifetime of the process.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load environment variables from .env file
load_dotenv()

# Fixed key of the ephemeral backend's snapshot slot.
SNAPSHOT_KEY = "hm_manager_memory_storage_v1"

DEFAULT_DATABASE_URL = "sqlite:///./homework_manager.db"
DEFAULT_SNAPSHOT_DIR = "./data"


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes")


class Settings(BaseModel):
    """Runtime settings resolved from the environment."""

    web_mode: bool = Field(default=False, description="True when running in the web/browser context.")
    database_url: str = Field(default=DEFAULT_DATABASE_URL)
    snapshot_dir: Path = Field(default=Path(DEFAULT_SNAPSHOT_DIR))
    seed_sample_data: bool = Field(default=True)
    log_level: str = Field(default="INFO")


def get_settings() -> Settings:
    return Settings(
        web_mode=_env_flag("HOMEWORK_WEB_MODE", "false"),
        database_url=os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL),
        snapshot_dir=Path(os.getenv("SNAPSHOT_DIR", DEFAULT_SNAPSHOT_DIR)),
        seed_sample_data=_env_flag("SEED_SAMPLE_DATA", "true"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
