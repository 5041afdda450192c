"""
Payment gateway exceptions
"""

from .base import RealtyCRMException

class PaymentError(RealtyCRMException):
    """Exception raised during payment operations"""
    
    def __init__(self, message: str, operation: str = None):
        self.operation = operation
        super().__init__(message, 'PAYMENT_ERROR')

class PaymentGatewayError(PaymentError):
    """Exception raised for payment gateway API errors"""
    
    def __init__(self, message: str, status_code: int = None, response_data=None):
        self.status_code = status_code
        self.response_data = response_data
        super().__init__(message, 'initiate')
        self.error_code = 'PAYMENT_GATEWAY_ERROR'
    
    def to_dict(self):
        return {
            'success': False,
            'message': self.message,
        }
