"""
Data formatting utilities
"""

from datetime import datetime, date
from decimal import Decimal
from typing import Union, Optional

def format_currency(amount: Union[int, float, Decimal], currency_symbol: str = '₹') -> str:
    """Format number as currency with proper thousands separators"""
    try:
        return f"{currency_symbol}{amount:,.2f}"
    except (ValueError, TypeError):
        return f"{currency_symbol}0.00"

def format_date(date_obj: Union[datetime, date], format_string: str = '%d %b %Y') -> str:
    """Format date object to string"""
    try:
        if isinstance(date_obj, (datetime, date)):
            return date_obj.strftime(format_string)
        else:
            return str(date_obj)
    except (ValueError, AttributeError):
        return 'Invalid Date'

def split_full_name(full_name: str) -> tuple:
    """Split 'First Middle Last' into ('First', 'Middle Last')"""
    if not full_name:
        return '', ''
    first, _, rest = full_name.strip().partition(' ')
    return first, rest.strip()

def parse_iso_datetime(value: Optional[str]) -> Optional[datetime]:
    """Parse ISO dates sent by the frontend (trailing Z allowed)"""
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    text = str(value).strip()
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    # Stored datetimes are naive UTC
    if parsed.tzinfo is not None:
        parsed = parsed.replace(tzinfo=None) - parsed.utcoffset()
    return parsed
