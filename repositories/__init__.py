"""
JSON file repositories.
"""
from .leads import LeadRepository
from .quotations import QuotationRepository, QuotationHistoryRepository
from .orders import OrderRepository
from .trainers import TrainerRepository, TrainerPORepository, TrainingRepository

__all__ = [
    "LeadRepository",
    "QuotationRepository",
    "QuotationHistoryRepository",
    "OrderRepository",
    "TrainerRepository",
    "TrainerPORepository",
    "TrainingRepository",
]
