from pydantic import BaseModel
from typing import Any, Optional


def coerce_optional_number(value: Any) -> Optional[float]:
    """Form-style number: blank or unparseable input becomes None instead of a validation error."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        cleaned = value.strip().replace(",", "")
        if not cleaned:
            return None
        try:
            return float(cleaned)
        except ValueError:
            return None
    return None


class StatusUpdateRequest(BaseModel):
    status: str
