import logging
from typing import Any, Dict, List, Optional

from dto.request_dto.training import TrainingCreateRequest, TrainingUpdateRequest
from repositories.trainers import TrainingRepository

logger = logging.getLogger(__name__)

DETAIL_FIELDS = (
    "id",
    "client_name",
    "training_type",
    "start_date",
    "end_date",
    "trainer",
    "costs",
    "prices",
)


class TrainingService:
    """Confirmed trainings with their per-day costs and prices."""

    def __init__(self):
        self.repo = TrainingRepository()

    def create_training(self, request: TrainingCreateRequest) -> Dict[str, Any]:
        data = request.model_dump(mode="json")
        data["status"] = "Confirmed"
        training = self.repo.insert(data)
        logger.info(f"Training {training['id']} confirmed for {training['client_name']}")
        return training

    def list_trainings(self) -> List[Dict[str, Any]]:
        return self.repo.list_all()

    def get_training(self, training_id: str) -> Optional[Dict[str, Any]]:
        return self.repo.get_by_id(training_id)

    def get_details(self, training_id: str) -> Optional[Dict[str, Any]]:
        training = self.repo.get_by_id(training_id)
        if training is None:
            return None
        return {key: training.get(key) for key in DETAIL_FIELDS}

    def update_training(self, training_id: str, request: TrainingUpdateRequest) -> Optional[Dict[str, Any]]:
        return self.repo.update(training_id, request.model_dump(mode="json", exclude_unset=True))
