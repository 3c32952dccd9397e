# utils/formatting.py
import random
import time
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Union

from core.settings import settings
from services.financials import round_money, to_decimal

DateLike = Union[str, date, datetime]


def format_currency(amount, symbol: Optional[str] = None) -> str:
    """Format an amount for display, e.g. ₹1,234.50"""
    symbol = settings.CURRENCY_SYMBOL if symbol is None else symbol
    value = amount if isinstance(amount, Decimal) else Decimal(str(amount or 0))
    return f"{symbol}{round_money(value):,.2f}"


def format_percent(value: Optional[Decimal]) -> str:
    if value is None:
        return "n/a"
    return f"{Decimal(value):.1f}%"


def generate_unique_number(prefix: str, with_suffix: bool = True) -> str:
    """Business document number: PREFIX-<epoch ms>-<3 random digits>"""
    timestamp = int(time.time() * 1000)
    if not with_suffix:
        return f"{prefix}-{timestamp}"
    return f"{prefix}-{timestamp}-{random.randint(0, 999):03d}"


def parse_date(value: DateLike) -> date:
    """Accept a date, a datetime or an ISO string (date or datetime)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()


def calculate_days(start: DateLike, end: DateLike) -> int:
    """Inclusive day count between two dates; 0 when the range is reversed."""
    days = (parse_date(end) - parse_date(start)).days + 1
    return max(days, 0)


def to_amount(value) -> float:
    """Stored/JSON form of a money value."""
    number = to_decimal(value) if not isinstance(value, Decimal) else value
    return float(number) if number is not None else 0.0
