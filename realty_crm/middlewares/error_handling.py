"""
Error handling middleware for global error management
"""

import logging

from flask import request, jsonify
from realty_crm.exceptions import (RealtyCRMException, ValidationError, AuthenticationError,
                                   AuthorizationError, RecordNotFoundError, InsufficientFundsError,
                                   PaymentGatewayError)
from realty_crm.models import db

logger = logging.getLogger(__name__)

# Most specific first
STATUS_CODES = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (RecordNotFoundError, 404),
    (InsufficientFundsError, 409),
    (PaymentGatewayError, 500),
)

def status_for(error: RealtyCRMException) -> int:
    for exc_type, status in STATUS_CODES:
        if isinstance(error, exc_type):
            return status
    return 500

class ErrorHandlingMiddleware:
    """Middleware for global error handling"""

    def __init__(self, app):
        self.app = app
        self.setup_error_handlers()

    def setup_error_handlers(self):
        """Setup global error handlers"""
        @self.app.errorhandler(RealtyCRMException)
        def application_error(error):
            db.session.rollback()
            status = status_for(error)
            if status >= 500:
                logger.error(f"{request.method} {request.path} failed: {error.message}")
            else:
                logger.info(f"{request.method} {request.path} rejected: {error.message}")
            return jsonify(error.to_dict()), status

        @self.app.errorhandler(404)
        def not_found(error):
            if request.path.startswith('/api/'):
                return jsonify({'success': False, 'error': 'Resource not found'}), 404
            return "Page not found", 404

        @self.app.errorhandler(500)
        def internal_error(error):
            db.session.rollback()
            if request.path.startswith('/api/'):
                return jsonify({'success': False, 'error': 'Internal server error'}), 500
            return "Internal server error", 500

        @self.app.errorhandler(403)
        def forbidden(error):
            if request.path.startswith('/api/'):
                return jsonify({'success': False, 'error': 'Access forbidden'}), 403
            return "Access forbidden", 403
