"""
Middlewares package
Request/response hooks shared by all routes
"""

from .cache import CacheMiddleware
from .error_handling import ErrorHandlingMiddleware
from .logging import LoggingMiddleware
from .security import SecurityMiddleware

def setup_middlewares(app):
    """Attach all middlewares to the Flask app"""
    CacheMiddleware(app)
    ErrorHandlingMiddleware(app)
    LoggingMiddleware(app)
    SecurityMiddleware(app)


__all__ = [
    'setup_middlewares',
    'CacheMiddleware', 'ErrorHandlingMiddleware',
    'LoggingMiddleware', 'SecurityMiddleware'
]
