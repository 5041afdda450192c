"""
Base controller with common functionality
"""

from flask import session, request, jsonify
from functools import wraps
from realty_crm.models import db
from realty_crm.models.user import User
from realty_crm.config.session import SessionManager
from realty_crm.services.database import DatabaseService

class BaseController:
    """Base controller with common functionality"""

    def __init__(self, app):
        self.app = app
        self.db_service = DatabaseService()
        self.register_routes()

    def register_routes(self):
        """Register routes - to be implemented by subclasses"""
        pass

    def login_required(self, f):
        """Decorator for routes requiring authentication"""
        @wraps(f)
        def decorated_function(*args, **kwargs):
            user = self.get_current_user()
            if not user:
                session.clear()
                return jsonify({'success': False, 'error': 'Authentication required'}), 401

            return f(*args, **kwargs)
        return decorated_function

    def admin_required(self, f):
        """Decorator for routes requiring admin access"""
        @wraps(f)
        def decorated_function(*args, **kwargs):
            user = self.get_current_user()
            if not user:
                session.clear()
                return jsonify({'success': False, 'error': 'Authentication required'}), 401

            if not user.is_admin:
                return jsonify({'success': False, 'error': 'Admin access required'}), 403

            return f(*args, **kwargs)
        return decorated_function

    def get_current_user(self) -> User:
        """Get current authenticated user"""
        user_id = SessionManager.get_current_user_id(session)
        if user_id:
            return db.session.get(User, user_id)
        return None

    @staticmethod
    def get_json() -> dict:
        """Request JSON body, or form fields for form posts"""
        data = request.get_json(silent=True)
        if data is None:
            data = request.form.to_dict()
        return data
