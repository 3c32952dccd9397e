from pydantic import BaseModel
from typing import Optional

class LeadCreateRequest(BaseModel):
    lead_number: Optional[str] = None
    date: Optional[str] = None
    company_name: str
    contact_person: str
    email: Optional[str] = None
    phone: Optional[str] = None
    course: Optional[str] = None
    participants: Optional[int] = None
    requirements: Optional[str] = None

