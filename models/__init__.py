from .domain import (
    FinancialSummary,
    ItemCategory,
    ItemProfit,
    ItemTotals,
    LineItem,
    ProfitBreakdown,
    TaxSummary,
)

__all__ = [
    "FinancialSummary",
    "ItemCategory",
    "ItemProfit",
    "ItemTotals",
    "LineItem",
    "ProfitBreakdown",
    "TaxSummary",
]
