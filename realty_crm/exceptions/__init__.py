"""
Custom exception classes for the application
"""

from .base import RealtyCRMException, ValidationError
from .auth import AuthenticationError, AuthorizationError, InvalidCredentialsError, AccountInactiveError
from .data import (DataValidationError, RecordNotFoundError, InvalidEarningRuleError,
                   InvalidCurrencyError, InsufficientFundsError)
from .payment import PaymentError, PaymentGatewayError

__all__ = [
    'RealtyCRMException', 'ValidationError',
    'AuthenticationError', 'AuthorizationError',
    'InvalidCredentialsError', 'AccountInactiveError',
    'DataValidationError', 'RecordNotFoundError', 'InvalidEarningRuleError',
    'InvalidCurrencyError', 'InsufficientFundsError',
    'PaymentError', 'PaymentGatewayError'
]
