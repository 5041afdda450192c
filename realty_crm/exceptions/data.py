"""
Data validation and lookup exceptions
"""

from .base import RealtyCRMException, ValidationError

class DataValidationError(ValidationError):
    """Exception raised for data validation errors"""
    
    def __init__(self, message: str, field: str = None, value=None):
        self.value = value
        super().__init__(message, field)

class RecordNotFoundError(RealtyCRMException):
    """Exception raised when a referenced record does not exist"""
    
    def __init__(self, kind: str, record_id):
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind} not found: {record_id}", 'NOT_FOUND')

class InvalidEarningRuleError(DataValidationError):
    """Exception raised for earning rules that cannot be applied"""
    
    def __init__(self, message: str, field: str = 'type', value=None):
        super().__init__(message, field, value)
        self.error_code = 'INVALID_EARNING_RULE'

class InvalidCurrencyError(DataValidationError):
    """Exception raised for invalid currency amounts"""
    
    def __init__(self, currency_value, field: str = 'amount'):
        message = f"Invalid currency amount: {currency_value}"
        super().__init__(message, field, currency_value)

class InsufficientFundsError(RealtyCRMException):
    """Exception raised when a wallet or reward balance cannot cover a debit"""
    
    def __init__(self, available, requested, unit: str = 'balance'):
        self.available = available
        self.requested = requested
        super().__init__(
            f"Insufficient {unit}: requested {requested}, available {available}",
            'INSUFFICIENT_FUNDS'
        )
