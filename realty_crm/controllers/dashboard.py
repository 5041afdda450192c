"""
Main dashboard controller
"""

from flask import jsonify
from realty_crm.controllers.base import BaseController
from realty_crm.config import ROLE_CONFIG
from realty_crm.services.analytics import AnalyticsService

class DashboardController(BaseController):
    """Handles dashboard routes"""

    def register_routes(self):
        """Register dashboard routes"""
        self.app.add_url_rule('/api/dashboard', 'dashboard.stats', self.login_required(self.stats))
        self.app.add_url_rule('/api/menu', 'dashboard.menu', self.login_required(self.menu))
        self.app.add_url_rule('/healthz', 'dashboard.health', self.health)

    def stats(self):
        """Role-specific dashboard stats"""
        user = self.get_current_user()
        return jsonify({
            'success': True,
            'role': user.role,
            'stats': AnalyticsService().get_dashboard_stats(user)
        })

    def menu(self):
        user = self.get_current_user()
        return jsonify({'success': True, 'menu': ROLE_CONFIG.get_menu(user.role)})

    def health(self):
        """Health check endpoint"""
        return {'ok': True}, 200
