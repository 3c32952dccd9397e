from fastapi import APIRouter, HTTPException, BackgroundTasks, Body
from typing import Any, Dict
from dto.request_dto.training import TrainingCreateRequest, TrainingUpdateRequest
from services.notifications import EmailNotifier, build_training_confirmation_email
from services.trainings import TrainingService
import logging

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/trainings", tags=["Trainings"])


def send_confirmation_background(training: Dict[str, Any]):
    """Background task: confirmation mail to the trainer. Failures are only logged."""
    try:
        subject, body = build_training_confirmation_email(training)
        EmailNotifier().send(training.get("trainer_email"), subject, body)
    except Exception as e:
        logger.error(f"Failed to send training confirmation: {e}", exc_info=True)


@router.post("", status_code=201, summary="Create Training")
async def create_training(
    background_tasks: BackgroundTasks,
    request: TrainingCreateRequest = Body(...)
):
    try:
        training = TrainingService().create_training(request)
        background_tasks.add_task(send_confirmation_background, training)
        return training
    except Exception as e:
        logger.error(f"Error creating training: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to create training: {str(e)}")


@router.get("", summary="List Trainings")
async def list_trainings():
    try:
        return TrainingService().list_trainings()
    except Exception as e:
        logger.error(f"Error fetching trainings: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to fetch trainings: {str(e)}")


@router.get("/{training_id}", summary="Get Training")
async def get_training(training_id: str):
    try:
        training = TrainingService().get_training(training_id)
        if not training:
            raise HTTPException(status_code=404, detail="Training not found")
        return training
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching training: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to fetch training: {str(e)}")


@router.get("/{training_id}/details", summary="Get Training Details")
async def get_training_details(training_id: str):
    """Client, type, dates, trainer and the per-day costs and prices of a training."""
    try:
        details = TrainingService().get_details(training_id)
        if not details:
            raise HTTPException(status_code=404, detail="Training not found")
        return details
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching training details: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to fetch training details: {str(e)}")


@router.put("/{training_id}", summary="Update Training")
async def update_training(training_id: str, request: TrainingUpdateRequest = Body(...)):
    try:
        training = TrainingService().update_training(training_id, request)
        if not training:
            raise HTTPException(status_code=404, detail="Training not found")
        return training
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating training: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to update training: {str(e)}")
