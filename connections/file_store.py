"""
Flat JSON file storage.
One file per collection, each holding a JSON array of records.
"""
import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from core.settings import settings

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when a collection file cannot be read."""


class FileStore:
    """Process-wide manager for the JSON collection files."""

    COLLECTIONS = (
        "leads",
        "quotations",
        "quotation_history",
        "orders",
        "trainers",
        "trainer_pos",
        "trainings",
    )

    _data_dir: Path = None

    @classmethod
    def get_data_dir(cls) -> Path:
        """Get the storage directory, resolving it from settings on first use."""
        if cls._data_dir is None:
            cls._data_dir = Path(settings.DATA_DIR)
        return cls._data_dir

    @classmethod
    def configure(cls, data_dir) -> None:
        """Point the store at another directory (used by tests and scripts)."""
        cls._data_dir = Path(data_dir)
        logger.info(f"File store directory set to {cls._data_dir}")

    @classmethod
    def collection_path(cls, collection: str) -> Path:
        if collection not in cls.COLLECTIONS:
            raise StorageError(f"Unknown collection: {collection}")
        return cls.get_data_dir() / f"{collection}.json"

    @classmethod
    def initialize(cls) -> None:
        """Create the data directory and an empty array file for every collection."""
        data_dir = cls.get_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)

        created = 0
        for collection in cls.COLLECTIONS:
            path = cls.collection_path(collection)
            if not path.exists():
                path.write_text("[]", encoding="utf-8")
                created += 1

        logger.info(f"File store ready at {data_dir} ({created} new collection files)")

    @classmethod
    def read(cls, collection: str) -> List[Dict[str, Any]]:
        """Read all records of a collection; a missing file is recreated empty."""
        path = cls.collection_path(collection)
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text("[]", encoding="utf-8")
            return []

        if not raw.strip():
            return []

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageError(f"Corrupt collection file {path.name}: {e}") from e

        if not isinstance(data, list):
            raise StorageError(f"Collection file {path.name} does not hold a JSON array")
        return data

    @classmethod
    def write(cls, collection: str, records: List[Dict[str, Any]]) -> None:
        """Replace a collection's contents."""
        path = cls.collection_path(collection)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(records, indent=2, ensure_ascii=False), encoding="utf-8")

    @classmethod
    def check_storage(cls) -> bool:
        """
        Check that every collection file can be read.

        Returns:
            True if all files are readable, False otherwise
        """
        try:
            for collection in cls.COLLECTIONS:
                cls.read(collection)
            return True
        except Exception as e:
            logger.error(f"Storage check failed: {e}")
            return False
