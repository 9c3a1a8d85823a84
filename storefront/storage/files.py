"""File-backed cart storage"""

import logging
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)


class FileStorage:
    """
    Key-value slots kept as one UTF-8 file per key.

    Writes are plain overwrites: a crash mid-write can lose the last value,
    which the cart tolerates.
    """

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key.startswith("."):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        """Read the value stored under key"""
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        """Write value under key, creating the directory if needed"""
        path = self._path(key)
        self.directory.mkdir(parents=True, exist_ok=True)
        path.write_text(value, encoding="utf-8")
        logger.debug(f"Wrote {len(value)} bytes to {path}")

    def remove_item(self, key: str) -> None:
        """Delete the slot file if it exists"""
        self._path(key).unlink(missing_ok=True)
