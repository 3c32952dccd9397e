"""
Monthly business statistics over trainings, quotations and leads.
"""
import logging
from calendar import monthrange
from datetime import date
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Tuple

from dto.response_dto.report import MonthlyStat
from repositories.leads import LeadRepository
from repositories.quotations import QuotationRepository
from repositories.trainers import TrainingRepository
from services.financials import ZERO, round_money, to_decimal
from utils.formatting import calculate_days, parse_date

logger = logging.getLogger(__name__)

REPORT_MONTHS = 6
PER_DAY_KEYS = ("trainer_per_day", "lab_per_day", "platform_per_day")


def month_window(today: date, months_back: int) -> Tuple[date, date]:
    """First and last day of the calendar month `months_back` months before today's."""
    year, month = today.year, today.month - months_back
    while month <= 0:
        month += 12
        year -= 1
    return date(year, month, 1), date(year, month, monthrange(year, month)[1])


def _created_in(record: Dict[str, Any], start: date, end: date) -> bool:
    created = record.get("created_at")
    if not created:
        return False
    try:
        created_on = parse_date(created)
    except ValueError:
        return False
    return start <= created_on <= end


def _per_day_total(amounts: Optional[Dict[str, Any]]) -> Decimal:
    amounts = amounts or {}
    return sum((to_decimal(amounts.get(key)) or ZERO for key in PER_DAY_KEYS), ZERO)


def training_value(training: Dict[str, Any], key: str) -> Decimal:
    """Days of the training times its per-day `prices` or `costs`."""
    try:
        days = calculate_days(training["start_date"], training["end_date"])
    except (KeyError, TypeError, ValueError):
        logger.warning(f"Training {training.get('id')} has unusable dates, counted as 0 days")
        days = 0
    return Decimal(days) * _per_day_total(training.get(key))


class ReportService:

    def __init__(self):
        self.training_repo = TrainingRepository()
        self.quotation_repo = QuotationRepository()
        self.lead_repo = LeadRepository()

    def monthly_stats(self, today: Optional[date] = None) -> List[MonthlyStat]:
        """Stats for the last six calendar months, oldest first."""
        today = today or date.today()
        trainings = self.training_repo.list_all()
        quotations = self.quotation_repo.list_all()
        leads = self.lead_repo.list_all()

        def in_month(records: Iterable[Dict[str, Any]], start: date, end: date) -> List[Dict[str, Any]]:
            return [r for r in records if _created_in(r, start, end)]

        stats = []
        for months_back in range(REPORT_MONTHS - 1, -1, -1):
            start, end = month_window(today, months_back)
            monthly_trainings = in_month(trainings, start, end)

            revenue = sum((training_value(t, "prices") for t in monthly_trainings), ZERO)
            costs = sum((training_value(t, "costs") for t in monthly_trainings), ZERO)

            stats.append(MonthlyStat(
                month=start.strftime("%b"),
                year=start.year,
                revenue=float(round_money(revenue)),
                profit=float(round_money(revenue - costs)),
                trainings=len(monthly_trainings),
                quotations=len(in_month(quotations, start, end)),
                leads=len(in_month(leads, start, end)),
            ))

        return stats
