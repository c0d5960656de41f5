# /homework-tracker/homework_tracker/services/database_helpers/snapshot_store.py

"""
A durable key-value slot store backing the ephemeral backend.

Each key maps to one JSON file inside a directory. Writes go to a temporary
file first and are then moved over the target with `os.replace`, so a crash
mid-write leaves the previous snapshot intact.
"""

import os
import re
import tempfile
from pathlib import Path
from typing import Optional, Union

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


class FileSnapshotStore:
    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)

    def _path_for(self, key: str) -> Path:
        if not _SAFE_KEY.match(key):
            raise ValueError(f"Invalid snapshot key: {key!r}")
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        """Returns the stored text for `key`, or None if the slot is empty."""
        path = self._path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        path = self._path_for(key)
        self.directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp_file:
                tmp_file.write(value)
            os.replace(tmp_name, path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    def delete(self, key: str) -> bool:
        path = self._path_for(key)
        if path.exists():
            path.unlink()
            return True
        return False
