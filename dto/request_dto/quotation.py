from pydantic import BaseModel, Field, field_validator
from typing import List, Optional

from dto.request_dto.common import coerce_optional_number

class QuotationItemRequest(BaseModel):
    category: Optional[str] = Field(default=None, description="Item type, e.g. 'Trainer Cost'")
    description: str = ""
    cost: Optional[float] = None
    quantity: Optional[float] = 1

    @field_validator("cost", "quantity", mode="before")
    @classmethod
    def _lenient_number(cls, value):
        return coerce_optional_number(value)

class QuotationCreateRequest(BaseModel):
    quotation_number: Optional[str] = None
    date: Optional[str] = None
    lead_id: Optional[str] = None
    client_name: str
    contact_person: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    course_name: Optional[str] = None
    participants: Optional[int] = None
    duration: Optional[int] = None
    notes: Optional[str] = None
    items: List[QuotationItemRequest] = []

class QuotationUpdateRequest(BaseModel):
    quotation_number: Optional[str] = None
    date: Optional[str] = None
    client_name: Optional[str] = None
    contact_person: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    course_name: Optional[str] = None
    participants: Optional[int] = None
    duration: Optional[int] = None
    notes: Optional[str] = None
    items: Optional[List[QuotationItemRequest]] = None
    edit_reason: Optional[str] = None

class ItemsTotalsRequest(BaseModel):
    items: List[QuotationItemRequest] = []
