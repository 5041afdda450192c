"""
Input validation helpers
"""

import math
import re
from typing import Optional

def validate_email(email: str) -> bool:
    """Validate email address format"""
    if not email:
        return False
    
    email_pattern = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
    return bool(re.match(email_pattern, email))

def validate_phone(phone: str) -> bool:
    """Validate phone number format (Indian mobile numbers)"""
    if not phone:
        return False
    
    # Remove spaces, dashes, and parentheses
    cleaned_phone = re.sub(r'[\s\-\(\)]', '', phone)
    
    return bool(re.match(r'^(\+91|0091|91|0)?[6-9]\d{9}$', cleaned_phone))

def validate_currency(amount) -> tuple[bool, Optional[float]]:
    """Validate and parse currency amount"""
    if amount is None or amount == '':
        return False, None
    
    # Remove currency symbols and spaces
    cleaned_amount = re.sub(r'[₹$,\s]', '', str(amount))
    
    try:
        value = float(cleaned_amount)
        return math.isfinite(value) and value >= 0, value  # Finite, non-negative amounts only
    except ValueError:
        return False, None

def validate_pincode(pincode: str) -> bool:
    """Validate a 6-digit Indian postal code"""
    return bool(pincode) and bool(re.match(r'^[1-9]\d{5}$', pincode.strip()))

def validate_password(password: str, min_length: int = 8) -> bool:
    """Passwords must have a minimum length"""
    return bool(password) and len(password) >= min_length
