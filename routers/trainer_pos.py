from fastapi import APIRouter, HTTPException, BackgroundTasks, Body, Response
from typing import Any, Dict, Optional
from dto.request_dto.trainer import TrainerPOCreateRequest
from services.notifications import EmailNotifier, build_trainer_po_email
from services.trainers import TrainerPOService
import logging

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/trainer-pos", tags=["Trainer Purchase Orders"])


def send_po_email_background(po: Dict[str, Any], trainer: Dict[str, Any]):
    """Background task: email the PO, with its PDF attached, to the trainer."""
    try:
        pdf_bytes = TrainerPOService().build_pdf(po, trainer)
        subject, body = build_trainer_po_email(trainer, po)
        EmailNotifier().send(
            trainer.get("email"),
            subject,
            body,
            attachments=[(f"{po['po_number']}.pdf", pdf_bytes, "application/pdf")],
        )
    except Exception as e:
        logger.error(f"Sending PO {po.get('po_number')} failed: {e}", exc_info=True)


@router.post("", status_code=201, summary="Create Trainer PO")
async def create_trainer_po(
    background_tasks: BackgroundTasks,
    request: TrainerPOCreateRequest = Body(...)
):
    """
    Issue a purchase order to a trainer.

    Total amount = inclusive days between start and end date × daily rate
    (the trainer's own rate when none is given). The trainer is emailed the
    PO with the PDF attached after the response is sent.
    """
    try:
        po, trainer = TrainerPOService().create_po(request)
        background_tasks.add_task(send_po_email_background, po, trainer)
        return po
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error creating trainer PO: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to create trainer PO: {str(e)}")


@router.get("", summary="List Trainer POs")
async def list_trainer_pos(trainer_id: Optional[str] = None):
    try:
        return TrainerPOService().list_pos(trainer_id)
    except Exception as e:
        logger.error(f"Error reading trainer POs: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to retrieve trainer POs: {str(e)}")


@router.get("/{po_id}", summary="Get Trainer PO")
async def get_trainer_po(po_id: str):
    try:
        po = TrainerPOService().get_po(po_id)
        if not po:
            raise HTTPException(status_code=404, detail="Trainer PO not found")
        return po
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error retrieving trainer PO: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to retrieve trainer PO: {str(e)}")


@router.get("/{po_id}/download", summary="Download Trainer PO PDF")
async def download_trainer_po(po_id: str):
    try:
        service = TrainerPOService()
        po = service.get_po(po_id)
        if not po:
            raise HTTPException(status_code=404, detail="Trainer PO not found")

        return Response(
            content=service.build_pdf(po),
            media_type="application/pdf",
            headers={"Content-Disposition": f"attachment; filename={po['po_number']}.pdf"}
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error generating PO PDF: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to generate PO PDF: {str(e)}")
