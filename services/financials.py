"""
Line-item totals, GST and profit analysis for quotations and orders.

Everything here is a pure function over the items passed in. Amounts are
``Decimal`` end to end and are only rounded by ``round_money`` when shown.
Items may be ``LineItem`` instances or stored record dicts (``cost`` or
``unit_price`` for the unit amount, ``type`` or ``category`` for the category).
"""
import logging
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from models.domain import (
    FinancialSummary,
    ItemCategory,
    ItemProfit,
    ItemTotals,
    LineItem,
    ProfitBreakdown,
    TaxSummary,
)

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
ONE = Decimal("1")
HUNDRED = Decimal("100")
CENT = Decimal("0.01")

GST_RATE = Decimal("0.18")

# Share of the sale price assumed to be cost. TRAINER_COST is absent on purpose:
# its cost is the recorded unit cost times quantity.
COST_RATIOS: Dict[ItemCategory, Decimal] = {
    ItemCategory.ASSESSMENT_NO_PROCTORING: Decimal("0.60"),
    ItemCategory.ASSESSMENT_WITH_PROCTORING: Decimal("0.70"),
    ItemCategory.LAB_COST_PER_PAX: Decimal("0.50"),
    ItemCategory.LAB_ASSESSMENT_PER_PAX: Decimal("0.55"),
    ItemCategory.OTHER: Decimal("0.65"),
}
DEFAULT_COST_RATIO = Decimal("0.65")

# Margin bands used by the profit view
TARGET_MARGIN_PCT = Decimal("30")
WARNING_MARGIN_PCT = Decimal("20")


def to_decimal(value: Any) -> Optional[Decimal]:
    """Parse a non-negative finite number; None for missing, non-numeric or negative input."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        number = value
    elif isinstance(value, (int, float)):
        number = Decimal(str(value))
    elif isinstance(value, str):
        text = value.strip().replace(",", "")
        if not text:
            return None
        try:
            number = Decimal(text)
        except InvalidOperation:
            return None
    else:
        return None

    if not number.is_finite() or number < 0:
        return None
    return number


def round_money(value: Decimal) -> Decimal:
    """Round to 2 decimal places, half up, for display."""
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def _item_fields(item: Any) -> Tuple[ItemCategory, Any, Any]:
    if isinstance(item, LineItem):
        return item.category, item.unit_cost, item.quantity
    if isinstance(item, Mapping):
        category = item.get("category", item.get("type"))
        unit_cost = item.get("unit_cost", item.get("cost", item.get("unit_price")))
        return ItemCategory.parse(category), unit_cost, item.get("quantity", 1)
    raise TypeError(f"Unsupported line item: {type(item).__name__}")


def compute_line_total(unit_cost: Any, quantity: Any, clamp_quantity: bool = False) -> Decimal:
    """
    unit_cost * quantity.

    Missing, non-numeric or negative inputs contribute 0, as does a quantity
    that is not a whole number. With clamp_quantity (order items) a quantity of
    0 counts as 1; quotation items keep an explicit 0.
    """
    cost = to_decimal(unit_cost)
    qty = to_decimal(quantity)
    if cost is None or qty is None:
        return ZERO
    if qty != qty.to_integral_value():
        return ZERO
    if clamp_quantity and qty < ONE:
        qty = ONE
    return cost * qty


def totalize_items(items: Iterable[Any], clamp_quantity: bool = False) -> ItemTotals:
    """Per-item totals in input order and their subtotal."""
    per_item = []
    for item in items:
        _, unit_cost, quantity = _item_fields(item)
        per_item.append(compute_line_total(unit_cost, quantity, clamp_quantity))
    return ItemTotals(per_item_totals=per_item, subtotal=sum(per_item, ZERO))


def compute_subtotal(items: Iterable[Any], clamp_quantity: bool = False) -> Decimal:
    return totalize_items(items, clamp_quantity).subtotal


def apply_tax(subtotal: Any, tax_rate: Any = GST_RATE) -> TaxSummary:
    base = to_decimal(subtotal) or ZERO
    rate = to_decimal(tax_rate)
    if rate is None:
        rate = GST_RATE
    tax = base * rate
    return TaxSummary(tax=tax, grand_total=base + tax)


def summarize_items(
    items: Iterable[Any],
    tax_rate: Any = GST_RATE,
    clamp_quantity: bool = False,
) -> FinancialSummary:
    """Subtotal, tax and grand total of an item set."""
    subtotal = compute_subtotal(items, clamp_quantity)
    taxed = apply_tax(subtotal, tax_rate)
    return FinancialSummary(subtotal=subtotal, tax=taxed.tax, grand_total=taxed.grand_total)


def cost_ratio(category: Any) -> Decimal:
    return COST_RATIOS.get(ItemCategory.parse(category), DEFAULT_COST_RATIO)


def _margin_rating(margin_pct: Optional[Decimal]) -> Optional[str]:
    if margin_pct is None:
        return None
    if margin_pct >= TARGET_MARGIN_PCT:
        return "healthy"
    if margin_pct >= WARNING_MARGIN_PCT:
        return "moderate"
    return "low"


def analyze_profit(items: Iterable[Any], tax_rate: Any = GST_RATE) -> ProfitBreakdown:
    """
    Estimate cost and profit per item and in aggregate.

    Trainer cost items are costed at their own unit cost times quantity; every
    other category is costed as a fixed share of its price (see COST_RATIOS).
    Margin and markup are None when price or cost is zero.
    """
    rows = []
    total_price = ZERO
    total_cost = ZERO

    for item in items:
        category, unit_cost, quantity = _item_fields(item)
        description = item.description if isinstance(item, LineItem) else str(item.get("description") or "")

        price = compute_line_total(unit_cost, quantity)
        if category is ItemCategory.TRAINER_COST:
            estimated_cost = compute_line_total(unit_cost, quantity)
        else:
            estimated_cost = price * cost_ratio(category)

        rows.append(ItemProfit(
            category=category,
            description=description,
            price=price,
            estimated_cost=estimated_cost,
            profit=price - estimated_cost,
        ))
        total_price += price
        total_cost += estimated_cost

    total_profit = total_price - total_cost
    taxed = apply_tax(total_price, tax_rate)

    margin_pct = total_profit / total_price * HUNDRED if total_price != ZERO else None
    markup_pct = total_profit / total_cost * HUNDRED if total_cost != ZERO else None

    progress = ZERO
    if margin_pct is not None:
        progress = min(HUNDRED, max(ZERO, margin_pct / TARGET_MARGIN_PCT * HUNDRED))

    return ProfitBreakdown(
        items=rows,
        total_price=total_price,
        total_cost=total_cost,
        total_profit=total_profit,
        gst=taxed.tax,
        total_with_gst=taxed.grand_total,
        profit_margin_pct=margin_pct,
        markup_pct=markup_pct,
        margin_rating=_margin_rating(margin_pct),
        target_progress_pct=progress,
    )
