"""
Base repository over one JSON collection file.
"""
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from connections.file_store import FileStore

logger = logging.getLogger(__name__)


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class JsonRepository:
    """List/get/insert/update for the records of a single collection."""

    collection: str = ""
    id_prefix: str = ""

    def __init__(self, store=FileStore):
        self.store = store

    def new_id(self) -> str:
        return f"{self.id_prefix}{uuid.uuid4().hex}"

    def list_all(self) -> List[Dict[str, Any]]:
        return self.store.read(self.collection)

    def filter(self, predicate: Callable[[Dict[str, Any]], bool]) -> List[Dict[str, Any]]:
        return [record for record in self.list_all() if predicate(record)]

    def get_by_id(self, record_id: str) -> Optional[Dict[str, Any]]:
        for record in self.list_all():
            if record.get("id") == record_id:
                return record
        return None

    def insert(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Append a record, assigning id and created_at."""
        records = self.list_all()
        data = {k: v for k, v in data.items() if k not in ("id", "created_at")}
        record = {
            "id": self.new_id(),
            **data,
            "created_at": utc_now_iso(),
        }
        records.append(record)
        self.store.write(self.collection, records)
        logger.info(f"Inserted {self.collection} record {record['id']}")
        return record

    def update(self, record_id: str, changes: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Shallow-merge changes into a record. Returns None when it does not exist."""
        records = self.list_all()
        for index, record in enumerate(records):
            if record.get("id") == record_id:
                changes = {k: v for k, v in changes.items() if k not in ("id", "created_at")}
                updated = {
                    **record,
                    **changes,
                    "last_modified": utc_now_iso(),
                }
                records[index] = updated
                self.store.write(self.collection, records)
                logger.info(f"Updated {self.collection} record {record_id}")
                return updated
        return None
