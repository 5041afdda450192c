"""
Partner and seller management controller
"""

from flask import request, jsonify
from realty_crm.controllers.base import BaseController
from realty_crm.services.user_service import PartnerService, UserService

class PartnersController(BaseController):
    """Handles admin management of partner accounts"""

    def register_routes(self):
        """Register partner management routes"""
        self.partner_service = PartnerService()

        self.app.add_url_rule('/api/partners', 'partners.list',
                              self.admin_required(self.list_partners), methods=['GET'])
        self.app.add_url_rule('/api/partners', 'partners.create',
                              self.admin_required(self.create_partner), methods=['POST'])
        self.app.add_url_rule('/api/partners/<partner_id>', 'partners.get',
                              self.admin_required(self.get_partner), methods=['GET'])

        # Status transitions
        self.app.add_url_rule('/api/partners/<partner_id>/approve', 'partners.approve',
                              self.admin_required(self.approve), methods=['POST'])
        self.app.add_url_rule('/api/partners/<partner_id>/reject', 'partners.reject',
                              self.admin_required(self.reject), methods=['POST'])
        self.app.add_url_rule('/api/partners/<partner_id>/deactivate', 'partners.deactivate',
                              self.admin_required(self.deactivate), methods=['POST'])
        self.app.add_url_rule('/api/partners/<partner_id>/reactivate', 'partners.reactivate',
                              self.admin_required(self.reactivate), methods=['POST'])
        self.app.add_url_rule('/api/partners/<partner_id>/suspend', 'partners.suspend',
                              self.admin_required(self.suspend), methods=['POST'])

        self.app.add_url_rule('/api/users', 'partners.list_users',
                              self.admin_required(self.list_users), methods=['GET'])

    def list_partners(self):
        partners = self.partner_service.list_partners(request.args.get('status'))
        return jsonify({'success': True, 'partners': [p.to_dict() for p in partners]})

    def create_partner(self):
        """Admin onboarding; may hand back a gateway pay-page response"""
        partner, payment = self.partner_service.create_partner(self.get_json(), request.host_url)
        return jsonify({
            'success': True,
            'partner': partner.to_dict(),
            'payment': payment
        }), 201

    def get_partner(self, partner_id):
        partner = self.partner_service.get_partner(partner_id)
        return jsonify({'success': True, 'partner': partner.to_dict()})

    def approve(self, partner_id):
        partner = self.partner_service.approve(partner_id)
        return jsonify({'success': True, 'partner': partner.to_dict()})

    def reject(self, partner_id):
        partner = self.partner_service.reject(partner_id, self.get_json().get('reason'))
        return jsonify({'success': True, 'partner': partner.to_dict()})

    def deactivate(self, partner_id):
        partner = self.partner_service.deactivate(partner_id, self.get_json().get('reason'))
        return jsonify({'success': True, 'partner': partner.to_dict()})

    def reactivate(self, partner_id):
        partner = self.partner_service.reactivate(partner_id, self.get_json().get('reason'))
        return jsonify({'success': True, 'partner': partner.to_dict()})

    def suspend(self, partner_id):
        partner = self.partner_service.suspend(partner_id, self.get_json().get('reason'))
        return jsonify({'success': True, 'partner': partner.to_dict()})

    def list_users(self):
        users = UserService().list_users(request.args.get('role'), request.args.get('status'))
        return jsonify({'success': True, 'users': [u.to_dict() for u in users]})
