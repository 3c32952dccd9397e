from fastapi import APIRouter, HTTPException, Body
from typing import Optional
from dto.request_dto.common import StatusUpdateRequest
from dto.request_dto.lead import LeadCreateRequest
from services.leads import LeadService
import logging

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/leads", tags=["Leads"])


@router.get("", summary="List Leads")
async def list_leads(status: Optional[str] = None):
    """List all leads, optionally only those with the given status."""
    try:
        return LeadService().list_leads(status)
    except Exception as e:
        logger.error(f"Error reading leads: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to retrieve leads: {str(e)}")


@router.post("", status_code=201, summary="Create Lead")
async def create_lead(request: LeadCreateRequest = Body(...)):
    """Create a lead with status New. A lead number is generated when none is given."""
    try:
        return LeadService().create_lead(request)
    except Exception as e:
        logger.error(f"Error creating lead: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to create lead: {str(e)}")


@router.get("/{lead_id}", summary="Get Lead")
async def get_lead(lead_id: str):
    try:
        lead = LeadService().get_lead(lead_id)
        if not lead:
            raise HTTPException(status_code=404, detail="Lead not found")
        return lead
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error retrieving lead: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to retrieve lead: {str(e)}")


@router.patch("/{lead_id}/status", summary="Update Lead Status")
async def update_lead_status(lead_id: str, request: StatusUpdateRequest = Body(...)):
    """Move a lead to New, Contacted, Qualified, Converted or Lost."""
    try:
        lead = LeadService().update_status(lead_id, request.status)
        if not lead:
            raise HTTPException(status_code=404, detail="Lead not found")
        return lead
    except HTTPException:
        raise
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error updating lead status: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to update lead status: {str(e)}")
