"""
Authentication controller
"""

import logging

from flask import session, jsonify
from realty_crm.controllers.base import BaseController
from realty_crm.config import ROLE_CONFIG
from realty_crm.config.session import SessionManager
from realty_crm.services.user_service import UserService

logger = logging.getLogger(__name__)

class AuthController(BaseController):
    """Handles authentication and self-registration routes"""

    def register_routes(self):
        """Register authentication routes"""
        self.user_service = UserService()
        self.app.add_url_rule('/login', 'auth.login', self.login, methods=['POST'])
        self.app.add_url_rule('/logout', 'auth.logout', self.logout, methods=['POST'])
        self.app.add_url_rule('/register/partner', 'auth.register_partner', self.register_partner, methods=['POST'])
        self.app.add_url_rule('/register/seller', 'auth.register_seller', self.register_seller, methods=['POST'])
        self.app.add_url_rule('/api/me', 'auth.me', self.login_required(self.me))

    def login(self):
        """Handle login requests"""
        data = self.get_json()
        user = self.user_service.authenticate(data.get('email'), data.get('password'))
        SessionManager.sign_in(session, user)

        return jsonify({
            'success': True,
            'user': user.to_dict(),
            'redirect': ROLE_CONFIG.get_login_redirect(user.role)
        })

    def logout(self):
        """Handle logout requests"""
        SessionManager.sign_out(session)
        return jsonify({'success': True})

    def register_partner(self):
        user = self.user_service.register_partner(self.get_json())
        return jsonify({
            'success': True,
            'message': 'Registration submitted. Your account is pending approval.',
            'user': user.to_dict()
        }), 201

    def register_seller(self):
        user = self.user_service.register_seller(self.get_json())
        return jsonify({
            'success': True,
            'message': 'Registration submitted. Your account is pending approval.',
            'user': user.to_dict()
        }), 201

    def me(self):
        """Signed-in user with their navigation menu"""
        user = self.get_current_user()
        return jsonify({
            'success': True,
            'user': user.to_dict(),
            'menu': ROLE_CONFIG.get_menu(user.role)
        })
