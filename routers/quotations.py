from fastapi import APIRouter, HTTPException, Body, Response
from typing import Optional
from dto.request_dto.common import StatusUpdateRequest
from dto.request_dto.quotation import QuotationCreateRequest, QuotationUpdateRequest, ItemsTotalsRequest
from dto.response_dto.financials import ItemsTotalsResponse, ProfitAnalysisResponse
from services.orders import OrderService
from services.quotations import QuotationService
import logging

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/quotations", tags=["Quotations"])


@router.post("", status_code=201, summary="Create Quotation")
async def create_quotation(request: QuotationCreateRequest = Body(...)):
    """
    Create a quotation.

    Item totals, subtotal, GST and total are computed here from each item's
    cost and quantity; any totals sent by the client are ignored.

    **Request Body:**
    ```json
        {
            "client_name": "Acme Corp",
            "contact_person": "R. Singh",
            "items": [
                {"category": "Lab Cost per pax per day", "description": "AWS lab", "cost": 100, "quantity": 2}
            ]
        }
    ```
    """
    try:
        return QuotationService().create_quotation(request)
    except Exception as e:
        logger.error(f"Error creating quotation: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to create quotation: {str(e)}")


@router.get("", summary="List Quotations")
async def list_quotations(lead_id: Optional[str] = None):
    try:
        return QuotationService().list_quotations(lead_id)
    except Exception as e:
        logger.error(f"Error reading quotations: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to retrieve quotations: {str(e)}")


@router.post("/totals", response_model=ItemsTotalsResponse, summary="Preview Quotation Totals")
async def preview_quotation_totals(request: ItemsTotalsRequest = Body(...)):
    """Running totals for items being entered; nothing is saved."""
    return QuotationService().preview_totals(request.items)


@router.get("/{quotation_id}", summary="Get Quotation")
async def get_quotation(quotation_id: str):
    try:
        quotation = QuotationService().get_quotation(quotation_id)
        if not quotation:
            raise HTTPException(status_code=404, detail="Quotation not found")
        return quotation
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error retrieving quotation: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to retrieve quotation: {str(e)}")


@router.put("/{quotation_id}", summary="Update Quotation")
async def update_quotation(quotation_id: str, request: QuotationUpdateRequest = Body(...)):
    """Update a quotation and record the edit (with `edit_reason`) in its history."""
    try:
        quotation = QuotationService().update_quotation(quotation_id, request)
        if not quotation:
            raise HTTPException(status_code=404, detail="Quotation not found")
        return quotation
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating quotation: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to update quotation: {str(e)}")


@router.patch("/{quotation_id}/status", summary="Update Quotation Status")
async def update_quotation_status(quotation_id: str, request: StatusUpdateRequest = Body(...)):
    try:
        quotation = QuotationService().update_status(quotation_id, request.status)
        if not quotation:
            raise HTTPException(status_code=404, detail="Quotation not found")
        return quotation
    except HTTPException:
        raise
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error updating quotation status: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to update quotation status: {str(e)}")


@router.get("/{quotation_id}/history", summary="Get Quotation Edit History")
async def get_quotation_history(quotation_id: str):
    try:
        return QuotationService().get_history(quotation_id)
    except Exception as e:
        logger.error(f"Error reading quotation history: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to retrieve quotation history: {str(e)}")


@router.get("/{quotation_id}/profit", response_model=ProfitAnalysisResponse, summary="Quotation Profit Analysis")
async def get_quotation_profit(quotation_id: str):
    """
    Estimated cost, profit, margin and markup of a quotation.

    Trainer cost items are costed at their own cost; other item types at a
    fixed share of their price. Margin/markup are null when undefined.
    """
    try:
        analysis = QuotationService().analyze_quotation(quotation_id)
        if not analysis:
            raise HTTPException(status_code=404, detail="Quotation not found")
        return analysis
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Profit analysis error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to analyze quotation: {str(e)}")


@router.get("/{quotation_id}/download", summary="Download Quotation PDF")
async def download_quotation(quotation_id: str):
    try:
        service = QuotationService()
        quotation = service.get_quotation(quotation_id)
        if not quotation:
            raise HTTPException(status_code=404, detail="Quotation not found")

        pdf_bytes = service.build_pdf(quotation_id)
        return Response(
            content=pdf_bytes,
            media_type="application/pdf",
            headers={"Content-Disposition": f"attachment; filename=Quotation-{quotation_id}.pdf"}
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error generating PDF: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to generate quotation PDF: {str(e)}")


@router.post("/{quotation_id}/convert", status_code=201, summary="Convert Quotation to Order")
async def convert_quotation(quotation_id: str):
    """Create an order from the quotation's items; the quotation becomes Approved and its lead Converted."""
    try:
        order = OrderService().create_from_quotation(quotation_id)
        if not order:
            raise HTTPException(status_code=404, detail="Quotation not found")
        return order
    except HTTPException:
        raise
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error converting quotation: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to convert quotation: {str(e)}")
