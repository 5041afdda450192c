"""
Utility functions and helpers
"""

from .ids import generate_id, generate_unique_id
from .validators import validate_email, validate_phone, validate_currency, validate_pincode, validate_password
from .formatters import format_currency, format_date, split_full_name, parse_iso_datetime

__all__ = [
    'generate_id', 'generate_unique_id',
    'validate_email', 'validate_phone', 'validate_currency', 'validate_pincode', 'validate_password',
    'format_currency', 'format_date', 'split_full_name', 'parse_iso_datetime'
]
