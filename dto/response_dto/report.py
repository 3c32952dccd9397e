from pydantic import BaseModel

class MonthlyStat(BaseModel):
    month: str
    year: int
    revenue: float
    profit: float
    trainings: int
    quotations: int
    leads: int
