from pydantic import BaseModel, field_validator
from typing import List, Optional

from dto.request_dto.common import coerce_optional_number

class OrderItemRequest(BaseModel):
    description: str = ""
    quantity: Optional[float] = 1
    unit_price: Optional[float] = None

    @field_validator("quantity", "unit_price", mode="before")
    @classmethod
    def _lenient_number(cls, value):
        return coerce_optional_number(value)

class OrderCreateRequest(BaseModel):
    order_number: Optional[str] = None
    order_date: Optional[str] = None
    client_name: str
    contact_person: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    quotation_id: Optional[str] = None
    items: List[OrderItemRequest] = []

class OrderTotalsRequest(BaseModel):
    items: List[OrderItemRequest] = []
