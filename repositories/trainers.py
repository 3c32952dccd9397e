from typing import Any, Dict, List, Optional

from repositories.base import JsonRepository


class TrainerRepository(JsonRepository):
    collection = "trainers"


class TrainerPORepository(JsonRepository):
    collection = "trainer_pos"

    def list_pos(self, trainer_id: Optional[str] = None) -> List[Dict[str, Any]]:
        if not trainer_id:
            return self.list_all()
        return self.filter(lambda po: po.get("trainer_id") == trainer_id)


class TrainingRepository(JsonRepository):
    collection = "trainings"
