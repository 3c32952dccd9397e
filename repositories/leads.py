from typing import Any, Dict, List, Optional

from repositories.base import JsonRepository


class LeadRepository(JsonRepository):
    collection = "leads"

    def list_leads(self, status: Optional[str] = None) -> List[Dict[str, Any]]:
        if not status:
            return self.list_all()
        return self.filter(lambda lead: lead.get("status") == status)
