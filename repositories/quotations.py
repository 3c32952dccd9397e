"""
Repository for quotations and their edit history.
"""
import logging
from typing import Any, Dict, List, Optional

from repositories.base import JsonRepository, utc_now_iso

logger = logging.getLogger(__name__)


class QuotationRepository(JsonRepository):
    collection = "quotations"

    def list_quotations(self, lead_id: Optional[str] = None) -> List[Dict[str, Any]]:
        if not lead_id:
            return self.list_all()
        return self.filter(lambda q: q.get("lead_id") == lead_id)


class QuotationHistoryRepository(JsonRepository):
    """Append-only log of quotation edits."""
    collection = "quotation_history"

    def record_edit(
        self,
        quotation_id: str,
        changes: Dict[str, Any],
        reason: Optional[str] = None,
        editor: str = "System User",
    ) -> Dict[str, Any]:
        entries = self.list_all()
        entry = {
            "quotation_id": quotation_id,
            "date": utc_now_iso(),
            "reason": reason,
            "editor": editor,
            "changes": changes,
        }
        entries.append(entry)
        self.store.write(self.collection, entries)
        logger.info(f"Recorded edit history for quotation {quotation_id}")
        return entry

    def for_quotation(self, quotation_id: str) -> List[Dict[str, Any]]:
        return self.filter(lambda entry: entry.get("quotation_id") == quotation_id)
