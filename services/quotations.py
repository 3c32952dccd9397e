"""
Quotation service: composing, editing and analysing price quotations.
"""
import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional

from core.settings import settings
from dto.request_dto.quotation import QuotationCreateRequest, QuotationItemRequest, QuotationUpdateRequest
from dto.response_dto.financials import ItemProfitResponse, ItemsTotalsResponse, ProfitAnalysisResponse
from models.domain import ItemCategory
from repositories.quotations import QuotationHistoryRepository, QuotationRepository
from services.financials import analyze_profit, compute_line_total, round_money, summarize_items, totalize_items
from utils.formatting import generate_unique_number, to_amount
from utils.pdf_utils import generate_quotation_pdf

logger = logging.getLogger(__name__)

QUOTATION_STATUSES = ("Pending", "Approved", "Rejected")


def _money(value: Decimal) -> float:
    return float(round_money(value))


class QuotationService:
    """Quotations with server-side totals, edit history and profit analysis."""

    def __init__(self, tax_rate: Optional[Decimal] = None):
        self.repo = QuotationRepository()
        self.history_repo = QuotationHistoryRepository()
        self.tax_rate = tax_rate if tax_rate is not None else Decimal(str(settings.GST_RATE))

    def _build_items(self, items: List[QuotationItemRequest]) -> List[Dict[str, Any]]:
        """Stored item rows; a row's total is its cost times quantity."""
        rows = []
        for item in items:
            rows.append({
                "category": ItemCategory.parse(item.category).value if item.category else None,
                "description": item.description,
                "cost": item.cost,
                "quantity": item.quantity,
                "total": to_amount(compute_line_total(item.cost, item.quantity)),
            })
        return rows

    def _totals(self, rows: List[Dict[str, Any]]) -> Dict[str, float]:
        summary = summarize_items(rows, self.tax_rate)
        return {
            "subtotal": to_amount(summary.subtotal),
            "gst": to_amount(summary.tax),
            "total": to_amount(summary.grand_total),
        }

    def preview_totals(self, items: List[QuotationItemRequest]) -> ItemsTotalsResponse:
        """Running totals for a quotation being composed."""
        rows = self._build_items(items)
        totals = totalize_items(rows)
        summary = summarize_items(rows, self.tax_rate)
        return ItemsTotalsResponse(
            per_item_totals=[_money(total) for total in totals.per_item_totals],
            subtotal=_money(summary.subtotal),
            gst=_money(summary.tax),
            total=_money(summary.grand_total),
        )

    def create_quotation(self, request: QuotationCreateRequest) -> Dict[str, Any]:
        data = request.model_dump(exclude={"items"})
        data["quotation_number"] = data.get("quotation_number") or generate_unique_number("QT")
        rows = self._build_items(request.items)
        data["items"] = rows
        data.update(self._totals(rows))
        data["status"] = "Pending"

        quotation = self.repo.insert(data)
        logger.info(
            f"Quotation {quotation['quotation_number']} created: "
            f"{len(rows)} items, total {quotation['total']:,.2f}"
        )
        return quotation

    def list_quotations(self, lead_id: Optional[str] = None) -> List[Dict[str, Any]]:
        return self.repo.list_quotations(lead_id)

    def get_quotation(self, quotation_id: str) -> Optional[Dict[str, Any]]:
        return self.repo.get_by_id(quotation_id)

    def update_quotation(self, quotation_id: str, request: QuotationUpdateRequest) -> Optional[Dict[str, Any]]:
        """Merge changes, recompute totals when items change, and log the edit."""
        changes = request.model_dump(exclude_unset=True)
        reason = changes.pop("edit_reason", None)

        if "items" in changes:
            rows = self._build_items(request.items or [])
            changes["items"] = rows
            changes.update(self._totals(rows))

        updated = self.repo.update(quotation_id, changes)
        if updated is None:
            return None

        self.history_repo.record_edit(quotation_id, changes, reason=reason)
        return updated

    def get_history(self, quotation_id: str) -> List[Dict[str, Any]]:
        return self.history_repo.for_quotation(quotation_id)

    def update_status(self, quotation_id: str, status: str) -> Optional[Dict[str, Any]]:
        if status not in QUOTATION_STATUSES:
            raise ValueError(f"Invalid quotation status '{status}'. Allowed: {', '.join(QUOTATION_STATUSES)}")
        return self.repo.update(quotation_id, {"status": status})

    def analyze_quotation(self, quotation_id: str) -> Optional[ProfitAnalysisResponse]:
        """Cost/profit breakdown of a stored quotation, recomputed from its items."""
        quotation = self.repo.get_by_id(quotation_id)
        if quotation is None:
            return None

        breakdown = analyze_profit(quotation.get("items") or [], self.tax_rate)

        def pct(value: Optional[Decimal]) -> Optional[float]:
            return float(round_money(value)) if value is not None else None

        return ProfitAnalysisResponse(
            quotation_id=quotation["id"],
            quotation_number=quotation.get("quotation_number"),
            client_name=quotation.get("client_name"),
            items=[
                ItemProfitResponse(
                    category=row.category.value,
                    description=row.description,
                    price=_money(row.price),
                    estimated_cost=_money(row.estimated_cost),
                    profit=_money(row.profit),
                )
                for row in breakdown.items
            ],
            total_price=_money(breakdown.total_price),
            total_cost=_money(breakdown.total_cost),
            total_profit=_money(breakdown.total_profit),
            gst=_money(breakdown.gst),
            total_with_gst=_money(breakdown.total_with_gst),
            profit_margin_pct=pct(breakdown.profit_margin_pct),
            markup_pct=pct(breakdown.markup_pct),
            margin_rating=breakdown.margin_rating,
            target_progress_pct=float(round_money(breakdown.target_progress_pct)),
        )

    def build_pdf(self, quotation_id: str) -> Optional[bytes]:
        quotation = self.repo.get_by_id(quotation_id)
        if quotation is None:
            return None
        return generate_quotation_pdf(quotation)
