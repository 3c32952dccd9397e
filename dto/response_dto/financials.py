from pydantic import BaseModel
from typing import List, Optional

class ItemsTotalsResponse(BaseModel):
    per_item_totals: List[float]
    subtotal: float
    gst: float
    total: float

class ItemProfitResponse(BaseModel):
    category: str
    description: str
    price: float
    estimated_cost: float
    profit: float

class ProfitAnalysisResponse(BaseModel):
    quotation_id: Optional[str] = None
    quotation_number: Optional[str] = None
    client_name: Optional[str] = None
    items: List[ItemProfitResponse] = []
    total_price: float
    total_cost: float
    total_profit: float
    gst: float
    total_with_gst: float
    profit_margin_pct: Optional[float] = None  # None when total price is zero
    markup_pct: Optional[float] = None  # None when total cost is zero
    margin_rating: Optional[str] = None
    target_progress_pct: float = 0.0
