"""
Order service: orders entered directly or converted from a quotation.
"""
import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional

from core.settings import settings
from dto.request_dto.order import OrderCreateRequest, OrderItemRequest
from dto.response_dto.financials import ItemsTotalsResponse
from repositories.leads import LeadRepository
from repositories.orders import OrderRepository
from repositories.quotations import QuotationRepository
from services.financials import compute_line_total, round_money, summarize_items, totalize_items
from utils.formatting import generate_unique_number, to_amount

logger = logging.getLogger(__name__)

ORDER_STATUSES = ("Pending", "Processing", "Completed", "Cancelled")


class OrderService:

    def __init__(self, tax_rate: Optional[Decimal] = None):
        self.repo = OrderRepository()
        self.quotation_repo = QuotationRepository()
        self.lead_repo = LeadRepository()
        self.tax_rate = tax_rate if tax_rate is not None else Decimal(str(settings.GST_RATE))

    def _build_items(self, items: List[OrderItemRequest]) -> List[Dict[str, Any]]:
        rows = []
        for item in items:
            rows.append({
                "description": item.description,
                "quantity": item.quantity,
                "unit_price": item.unit_price,
                "total": to_amount(compute_line_total(item.unit_price, item.quantity, clamp_quantity=True)),
            })
        return rows

    def _totals(self, rows: List[Dict[str, Any]]) -> Dict[str, float]:
        summary = summarize_items(rows, self.tax_rate, clamp_quantity=True)
        return {
            "subtotal": to_amount(summary.subtotal),
            "gst": to_amount(summary.tax),
            "total": to_amount(summary.grand_total),
        }

    def preview_totals(self, items: List[OrderItemRequest]) -> ItemsTotalsResponse:
        rows = self._build_items(items)
        totals = totalize_items(rows, clamp_quantity=True)
        summary = summarize_items(rows, self.tax_rate, clamp_quantity=True)
        return ItemsTotalsResponse(
            per_item_totals=[float(round_money(total)) for total in totals.per_item_totals],
            subtotal=float(round_money(summary.subtotal)),
            gst=float(round_money(summary.tax)),
            total=float(round_money(summary.grand_total)),
        )

    def _save(self, data: Dict[str, Any], items: List[OrderItemRequest]) -> Dict[str, Any]:
        data["order_number"] = data.get("order_number") or generate_unique_number("ORD")
        rows = self._build_items(items)
        data["items"] = rows
        data.update(self._totals(rows))
        data["status"] = "Pending"

        order = self.repo.insert(data)
        logger.info(f"Order {order['order_number']} created: {len(rows)} items, total {order['total']:,.2f}")
        return order

    def create_order(self, request: OrderCreateRequest) -> Dict[str, Any]:
        if request.quotation_id and self.quotation_repo.get_by_id(request.quotation_id) is None:
            raise ValueError(f"Quotation {request.quotation_id} does not exist")
        return self._save(request.model_dump(exclude={"items"}), request.items)

    def create_from_quotation(self, quotation_id: str) -> Optional[Dict[str, Any]]:
        """
        Convert a quotation into an order.

        Items with no value on the quotation are left out. The quotation is
        marked Approved and its lead, if any, Converted.
        """
        quotation = self.quotation_repo.get_by_id(quotation_id)
        if quotation is None:
            return None
        if quotation.get("order_id"):
            raise ValueError(f"Quotation {quotation_id} was already converted to order {quotation['order_id']}")

        items = []
        for row in quotation.get("items") or []:
            if compute_line_total(row.get("cost"), row.get("quantity")) == 0:
                continue
            items.append(OrderItemRequest(
                description=row.get("description") or row.get("category") or "",
                quantity=row.get("quantity"),
                unit_price=row.get("cost"),
            ))

        data = {
            "order_number": None,
            "order_date": quotation.get("date"),
            "client_name": quotation.get("client_name"),
            "contact_person": quotation.get("contact_person"),
            "email": quotation.get("email"),
            "phone": quotation.get("phone"),
            "quotation_id": quotation_id,
        }
        order = self._save(data, items)

        self.quotation_repo.update(quotation_id, {"status": "Approved", "order_id": order["id"]})
        lead_id = quotation.get("lead_id")
        if lead_id and self.lead_repo.update(lead_id, {"status": "Converted"}) is None:
            logger.warning(f"Quotation {quotation_id} refers to missing lead {lead_id}")
        return order

    def list_orders(self) -> List[Dict[str, Any]]:
        return self.repo.list_all()

    def get_order(self, order_id: str) -> Optional[Dict[str, Any]]:
        return self.repo.get_by_id(order_id)

    def update_status(self, order_id: str, status: str) -> Optional[Dict[str, Any]]:
        if status not in ORDER_STATUSES:
            raise ValueError(f"Invalid order status '{status}'. Allowed: {', '.join(ORDER_STATUSES)}")
        return self.repo.update(order_id, {"status": status})
