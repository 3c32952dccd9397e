"""
Trainer records and the purchase orders issued to them.
"""
import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from dto.request_dto.trainer import TrainerCreateRequest, TrainerPOCreateRequest, TrainerUpdateRequest
from repositories.orders import OrderRepository
from repositories.trainers import TrainerPORepository, TrainerRepository
from services.financials import to_decimal
from utils.formatting import calculate_days, generate_unique_number, to_amount
from utils.pdf_utils import generate_purchase_order_pdf

logger = logging.getLogger(__name__)

TRAINER_STATUSES = ("Active", "Inactive")


class TrainerService:

    def __init__(self):
        self.repo = TrainerRepository()

    def create_trainer(self, request: TrainerCreateRequest) -> Dict[str, Any]:
        if request.status not in TRAINER_STATUSES:
            raise ValueError(f"Invalid trainer status '{request.status}'. Allowed: {', '.join(TRAINER_STATUSES)}")
        trainer = self.repo.insert(request.model_dump())
        logger.info(f"Trainer {trainer['name']} added")
        return trainer

    def list_trainers(self) -> List[Dict[str, Any]]:
        return self.repo.list_all()

    def get_trainer(self, trainer_id: str) -> Optional[Dict[str, Any]]:
        return self.repo.get_by_id(trainer_id)

    def update_trainer(self, trainer_id: str, request: TrainerUpdateRequest) -> Optional[Dict[str, Any]]:
        changes = request.model_dump(exclude_unset=True)
        if "status" in changes and changes["status"] not in TRAINER_STATUSES:
            raise ValueError(f"Invalid trainer status '{changes['status']}'. Allowed: {', '.join(TRAINER_STATUSES)}")
        return self.repo.update(trainer_id, changes)


class TrainerPOService:
    """Purchase orders for a trainer's engagement, billed per day."""

    def __init__(self):
        self.repo = TrainerPORepository()
        self.trainer_repo = TrainerRepository()
        self.order_repo = OrderRepository()

    def create_po(self, request: TrainerPOCreateRequest) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        """Create a PO and return it together with its trainer."""
        trainer = self.trainer_repo.get_by_id(request.trainer_id)
        if trainer is None:
            raise ValueError(f"Trainer {request.trainer_id} does not exist")
        if request.order_id and self.order_repo.get_by_id(request.order_id) is None:
            raise ValueError(f"Order {request.order_id} does not exist")
        if request.end_date < request.start_date:
            raise ValueError("End date must not be before start date")

        daily_rate = request.daily_rate if request.daily_rate is not None else trainer.get("daily_rate")
        rate = to_decimal(daily_rate)
        if rate is None:
            raise ValueError("A daily rate is required when the trainer has none on record")

        days = calculate_days(request.start_date, request.end_date)
        data = request.model_dump(mode="json")
        data.update({
            "po_number": request.po_number or generate_unique_number("PO", with_suffix=False),
            "daily_rate": to_amount(rate),
            "days": days,
            "total_amount": to_amount(rate * Decimal(days)),
            "status": "Pending",
        })

        po = self.repo.insert(data)
        logger.info(f"PO {po['po_number']} issued to {trainer.get('name')}: {days} days, total {po['total_amount']:,.2f}")
        return po, trainer

    def list_pos(self, trainer_id: Optional[str] = None) -> List[Dict[str, Any]]:
        return self.repo.list_pos(trainer_id)

    def get_po(self, po_id: str) -> Optional[Dict[str, Any]]:
        return self.repo.get_by_id(po_id)

    def build_pdf(self, po: Dict[str, Any], trainer: Optional[Dict[str, Any]] = None) -> bytes:
        if trainer is None:
            trainer = self.trainer_repo.get_by_id(po.get("trainer_id"))
        return generate_purchase_order_pdf(po, trainer)
