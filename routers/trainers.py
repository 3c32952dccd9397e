from fastapi import APIRouter, HTTPException, Body
from dto.request_dto.trainer import TrainerCreateRequest, TrainerUpdateRequest
from services.trainers import TrainerService
import logging

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/trainers", tags=["Trainers"])


@router.get("", summary="List Trainers")
async def list_trainers():
    try:
        return TrainerService().list_trainers()
    except Exception as e:
        logger.error(f"Error reading trainers: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to retrieve trainers: {str(e)}")


@router.post("", status_code=201, summary="Create Trainer")
async def create_trainer(request: TrainerCreateRequest = Body(...)):
    try:
        return TrainerService().create_trainer(request)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error creating trainer: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to create trainer: {str(e)}")


@router.get("/{trainer_id}", summary="Get Trainer")
async def get_trainer(trainer_id: str):
    try:
        trainer = TrainerService().get_trainer(trainer_id)
        if not trainer:
            raise HTTPException(status_code=404, detail="Trainer not found")
        return trainer
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error retrieving trainer: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to retrieve trainer: {str(e)}")


@router.put("/{trainer_id}", summary="Update Trainer")
async def update_trainer(trainer_id: str, request: TrainerUpdateRequest = Body(...)):
    try:
        trainer = TrainerService().update_trainer(trainer_id, request)
        if not trainer:
            raise HTTPException(status_code=404, detail="Trainer not found")
        return trainer
    except HTTPException:
        raise
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error updating trainer: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to update trainer: {str(e)}")
