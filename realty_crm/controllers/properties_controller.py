"""
Property listing controller
"""

from flask import request, jsonify
from realty_crm.controllers.base import BaseController
from realty_crm.exceptions import AuthorizationError
from realty_crm.services.property_service import PropertyService

class PropertiesController(BaseController):
    """Handles property listing routes"""

    def register_routes(self):
        """Register property routes"""
        self.property_service = PropertyService()

        self.app.add_url_rule('/api/properties', 'properties.list',
                              self.login_required(self.list_properties), methods=['GET'])
        self.app.add_url_rule('/api/properties', 'properties.create',
                              self.login_required(self.create_property), methods=['POST'])
        self.app.add_url_rule('/api/properties/<int:property_id>', 'properties.get',
                              self.login_required(self.get_property), methods=['GET'])
        self.app.add_url_rule('/api/properties/<int:property_id>/approve', 'properties.approve',
                              self.admin_required(self.approve), methods=['POST'])
        self.app.add_url_rule('/api/properties/<int:property_id>/status', 'properties.status',
                              self.admin_required(self.update_status), methods=['PUT'])
        self.app.add_url_rule('/api/properties/<int:property_id>/earning-rules', 'properties.earning_rules',
                              self.admin_required(self.set_earning_rules), methods=['PUT'])

    def list_properties(self):
        """Sellers only see their own listings"""
        user = self.get_current_user()
        owner_id = user.id if user.role == 'seller' else request.args.get('owner_id')
        properties = self.property_service.list_properties(request.args.get('status'), owner_id)
        return jsonify({'success': True, 'properties': [p.to_dict() for p in properties]})

    def create_property(self):
        user = self.get_current_user()
        if not (user.is_admin or user.role == 'seller'):
            raise AuthorizationError("Only sellers and admins can list properties.")
        prop = self.property_service.create_property(self.get_json(), user)
        return jsonify({'success': True, 'property': prop.to_dict()}), 201

    def get_property(self, property_id):
        prop = self.property_service.get_property(property_id)
        return jsonify({'success': True, 'property': prop.to_dict()})

    def approve(self, property_id):
        prop = self.property_service.approve(property_id)
        return jsonify({'success': True, 'property': prop.to_dict()})

    def update_status(self, property_id):
        data = self.get_json()
        prop = self.property_service.update_status(property_id, data.get('status'), data.get('notes'))
        return jsonify({'success': True, 'property': prop.to_dict()})

    def set_earning_rules(self, property_id):
        data = self.get_json()
        prop = self.property_service.set_earning_rules(property_id, data.get('earningRules', data))
        return jsonify({'success': True, 'earningRules': prop.get_earning_rules()})
