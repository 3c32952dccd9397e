from pydantic import BaseModel, Field
from typing import Optional
from datetime import date

class PerDayAmounts(BaseModel):
    trainer_per_day: float = Field(default=0.0, ge=0)
    lab_per_day: float = Field(default=0.0, ge=0)
    platform_per_day: float = Field(default=0.0, ge=0)

class TrainingCreateRequest(BaseModel):
    client_name: str
    training_type: str
    start_date: date
    end_date: date
    trainer: Optional[str] = None
    trainer_email: Optional[str] = None
    costs: PerDayAmounts = PerDayAmounts()
    prices: PerDayAmounts = PerDayAmounts()

class TrainingUpdateRequest(BaseModel):
    client_name: Optional[str] = None
    training_type: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    trainer: Optional[str] = None
    trainer_email: Optional[str] = None
    status: Optional[str] = None
    costs: Optional[PerDayAmounts] = None
    prices: Optional[PerDayAmounts] = None
