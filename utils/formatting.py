from datetime import date, datetime
from typing import Any, Optional


def format_number(value: Any, decimals: int = 2) -> str:
    """Fixed-decimals display string; None/empty renders as zero."""
    try:
        number = float(value or 0)
    except (TypeError, ValueError):
        number = 0.0
    return f"{number:.{decimals}f}"


def format_percentage(ratio: Optional[float]) -> str:
    """0.755 -> '75.5%'"""
    return f"{(ratio or 0) * 100:.1f}%"


def format_date(value: Optional[date]) -> Optional[str]:
    if value is None:
        return None
    return value.strftime("%d/%m/%Y")


def format_datetime(value: datetime) -> str:
    return value.strftime("%d/%m/%Y %H:%M")
