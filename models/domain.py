"""
Domain models for quotation and order line items and their derived figures.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, List, Optional


class ItemCategory(str, Enum):
    """Quotation item types, valued by the labels the business uses."""
    TRAINER_COST = "Trainer Cost"
    ASSESSMENT_NO_PROCTORING = "Assessment without Proctoring"
    ASSESSMENT_WITH_PROCTORING = "Assessment with Proctoring"
    LAB_COST_PER_PAX = "Lab Cost per pax per day"
    LAB_ASSESSMENT_PER_PAX = "Lab Assessment per pax"
    OTHER = "Other"

    @classmethod
    def parse(cls, value: Any) -> "ItemCategory":
        """Resolve a label (or member name) to a category; anything unknown is OTHER."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            text = value.strip()
            for member in cls:
                if text == member.value or text.upper() == member.name:
                    return member
        return cls.OTHER


@dataclass
class LineItem:
    """One quotation or order row. Cost and quantity are kept raw; totals derive from them."""
    category: ItemCategory = ItemCategory.OTHER
    description: str = ""
    unit_cost: Any = None
    quantity: Any = 1

    def __post_init__(self):
        self.category = ItemCategory.parse(self.category)

    @property
    def line_total(self) -> Decimal:
        """unit_cost * quantity, recomputed on every read."""
        from services.financials import compute_line_total
        return compute_line_total(self.unit_cost, self.quantity)


@dataclass
class ItemTotals:
    """Per-item totals in input order plus their sum."""
    per_item_totals: List[Decimal] = field(default_factory=list)
    subtotal: Decimal = Decimal("0")


@dataclass
class TaxSummary:
    tax: Decimal
    grand_total: Decimal


@dataclass
class FinancialSummary:
    """Subtotal, tax and grand total of an item set."""
    subtotal: Decimal
    tax: Decimal
    grand_total: Decimal


@dataclass
class ItemProfit:
    category: ItemCategory
    description: str
    price: Decimal
    estimated_cost: Decimal
    profit: Decimal


@dataclass
class ProfitBreakdown:
    """Cost and profit analysis of a quotation's items. Percentages are None when undefined."""
    items: List[ItemProfit] = field(default_factory=list)
    total_price: Decimal = Decimal("0")
    total_cost: Decimal = Decimal("0")
    total_profit: Decimal = Decimal("0")
    gst: Decimal = Decimal("0")
    total_with_gst: Decimal = Decimal("0")
    profit_margin_pct: Optional[Decimal] = None
    markup_pct: Optional[Decimal] = None
    margin_rating: Optional[str] = None
    target_progress_pct: Decimal = Decimal("0")
