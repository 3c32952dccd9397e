from pydantic import BaseModel, Field
from typing import Optional
from datetime import date

class TrainerCreateRequest(BaseModel):
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    expertise: Optional[str] = None
    daily_rate: Optional[float] = Field(default=None, ge=0)
    status: str = "Active"
    notes: Optional[str] = None

class TrainerUpdateRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    expertise: Optional[str] = None
    daily_rate: Optional[float] = Field(default=None, ge=0)
    status: Optional[str] = None
    notes: Optional[str] = None

class TrainerPOCreateRequest(BaseModel):
    po_number: Optional[str] = None
    po_date: Optional[date] = None
    order_id: Optional[str] = None
    trainer_id: str
    start_date: date
    end_date: date
    daily_rate: Optional[float] = Field(default=None, ge=0, description="Defaults to the trainer's daily rate")
    notes: Optional[str] = None
