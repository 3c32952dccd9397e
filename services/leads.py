import logging
from typing import Any, Dict, List, Optional

from dto.request_dto.lead import LeadCreateRequest
from repositories.leads import LeadRepository
from utils.formatting import generate_unique_number

logger = logging.getLogger(__name__)

LEAD_STATUSES = ("New", "Contacted", "Qualified", "Converted", "Lost")


class LeadService:
    """Sales lead intake and status tracking."""

    def __init__(self):
        self.repo = LeadRepository()

    def create_lead(self, request: LeadCreateRequest) -> Dict[str, Any]:
        data = request.model_dump()
        data["lead_number"] = data.get("lead_number") or generate_unique_number("LD")
        data["status"] = "New"
        lead = self.repo.insert(data)
        logger.info(f"Lead {lead['lead_number']} created for {lead['company_name']}")
        return lead

    def list_leads(self, status: Optional[str] = None) -> List[Dict[str, Any]]:
        return self.repo.list_leads(status)

    def get_lead(self, lead_id: str) -> Optional[Dict[str, Any]]:
        return self.repo.get_by_id(lead_id)

    def update_status(self, lead_id: str, status: str) -> Optional[Dict[str, Any]]:
        if status not in LEAD_STATUSES:
            raise ValueError(f"Invalid lead status '{status}'. Allowed: {', '.join(LEAD_STATUSES)}")
        return self.repo.update(lead_id, {"status": status})
