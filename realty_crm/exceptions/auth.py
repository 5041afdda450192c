"""
Authentication and authorization exceptions
"""

from .base import RealtyCRMException

class AuthenticationError(RealtyCRMException):
    """Exception raised for authentication failures"""
    
    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message, 'AUTH_ERROR')

class AuthorizationError(RealtyCRMException):
    """Exception raised for authorization failures"""
    
    def __init__(self, message: str = "Access denied"):
        super().__init__(message, 'AUTHORIZATION_ERROR')

class InvalidCredentialsError(AuthenticationError):
    """Exception raised for invalid login credentials"""
    
    def __init__(self, message: str = "Invalid email or password."):
        super().__init__(message)

class AccountInactiveError(AuthenticationError):
    """Exception raised when an account exists but may not sign in"""
    
    def __init__(self, status: str):
        self.status = status
        super().__init__(f"Your account is {status.replace('_', ' ')}. Please contact support.")
