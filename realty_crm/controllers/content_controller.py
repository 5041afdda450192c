"""
Requirements, resource center and messages controller
"""

from flask import request, jsonify
from realty_crm.controllers.base import BaseController
from realty_crm.services.file_service import FileService
from realty_crm.services.message_service import MessageService
from realty_crm.services.requirement_service import RequirementService
from realty_crm.services.resource_service import ResourceService

class RequirementsController(BaseController):
    """Handles buyer requirement routes"""

    def register_routes(self):
        """Register requirement routes"""
        self.requirement_service = RequirementService()

        self.app.add_url_rule('/api/requirements', 'requirements.list',
                              self.login_required(self.list_requirements), methods=['GET'])
        self.app.add_url_rule('/api/requirements', 'requirements.create',
                              self.login_required(self.create_requirement), methods=['POST'])

    def list_requirements(self):
        requirements = self.requirement_service.list_requirements(self.get_current_user())
        return jsonify({'success': True, 'requirements': [r.to_dict() for r in requirements]})

    def create_requirement(self):
        requirement = self.requirement_service.create_requirement(self.get_current_user(), self.get_json())
        return jsonify({'success': True, 'requirement': requirement.to_dict()}), 201


class ResourcesController(BaseController):
    """Handles resource center routes; anyone signed in may read, admins edit"""

    def register_routes(self):
        """Register resource routes"""
        self.resource_service = ResourceService()

        self.app.add_url_rule('/api/resource-categories', 'resources.list_categories',
                              self.login_required(self.list_categories), methods=['GET'])
        self.app.add_url_rule('/api/resource-categories', 'resources.create_category',
                              self.admin_required(self.create_category), methods=['POST'])
        self.app.add_url_rule('/api/resource-categories/<category_id>', 'resources.delete_category',
                              self.admin_required(self.delete_category), methods=['DELETE'])
        self.app.add_url_rule('/api/resources', 'resources.list',
                              self.login_required(self.list_resources), methods=['GET'])
        self.app.add_url_rule('/api/resources', 'resources.create',
                              self.admin_required(self.create_resource), methods=['POST'])
        self.app.add_url_rule('/api/resources/<resource_id>', 'resources.get',
                              self.login_required(self.get_resource), methods=['GET'])
        self.app.add_url_rule('/api/resources/<resource_id>', 'resources.update',
                              self.admin_required(self.update_resource), methods=['PUT'])
        self.app.add_url_rule('/api/resources/<resource_id>', 'resources.delete',
                              self.admin_required(self.delete_resource), methods=['DELETE'])

    def list_categories(self):
        categories = self.resource_service.list_categories()
        return jsonify({'success': True, 'categories': [c.to_dict() for c in categories]})

    def create_category(self):
        category = self.resource_service.create_category(self.get_json().get('name'))
        return jsonify({'success': True, 'category': category.to_dict()}), 201

    def delete_category(self, category_id):
        self.resource_service.delete_category(category_id)
        return jsonify({'success': True})

    def list_resources(self):
        resources = self.resource_service.list_resources(request.args.get('category_id'))
        return jsonify({'success': True, 'resources': [r.to_dict() for r in resources]})

    def get_resource(self, resource_id):
        resource = self.resource_service.get_resource(resource_id)
        return jsonify({'success': True, 'resource': resource.to_dict()})

    def create_resource(self):
        data = self.get_json()
        resource = self.resource_service.save_resource(data, feature_image_file_id=self._feature_image(data))
        return jsonify({'success': True, 'resource': resource.to_dict()}), 201

    def update_resource(self, resource_id):
        data = self.get_json()
        resource = self.resource_service.save_resource(data, resource_id, self._feature_image(data))
        return jsonify({'success': True, 'resource': resource.to_dict()})

    def delete_resource(self, resource_id):
        self.resource_service.delete_resource(resource_id)
        return jsonify({'success': True})

    def _feature_image(self, data):
        """Feature image arrives as a multipart file or a base64 data URL"""
        user = self.get_current_user()
        if 'feature_image' in request.files:
            return FileService().save_upload(request.files['feature_image'], user.id).id
        if data.get('feature_image'):
            return FileService().save_base64(data['feature_image'], uploaded_by=user.id).id
        return None


class MessagesController(BaseController):
    """Handles messages and announcements"""

    def register_routes(self):
        """Register message routes"""
        self.message_service = MessageService()

        self.app.add_url_rule('/api/messages', 'messages.inbox',
                              self.login_required(self.inbox), methods=['GET'])
        self.app.add_url_rule('/api/messages', 'messages.send',
                              self.login_required(self.send), methods=['POST'])
        self.app.add_url_rule('/api/messages/sent', 'messages.sent',
                              self.login_required(self.sent), methods=['GET'])
        self.app.add_url_rule('/api/messages/<int:message_id>/read', 'messages.read',
                              self.login_required(self.mark_read), methods=['POST'])

    def inbox(self):
        user = self.get_current_user()
        messages = [self._serialize(m, user) for m in self.message_service.inbox(user)]
        return jsonify({
            'success': True,
            'messages': messages,
            'unread': len([m for m in messages if not m['read']])
        })

    def sent(self):
        messages = self.message_service.sent(self.get_current_user())
        return jsonify({'success': True, 'messages': [m.to_dict() for m in messages]})

    def send(self):
        messages = self.message_service.send_message(self.get_current_user(), self.get_json())
        return jsonify({'success': True, 'messages': [m.to_dict() for m in messages]}), 201

    def mark_read(self, message_id):
        user = self.get_current_user()
        message = self.message_service.mark_read(user, message_id)
        return jsonify({'success': True, 'message': self._serialize(message, user)})

    @staticmethod
    def _serialize(message, user):
        data = message.to_dict()
        data['read'] = message.is_read_by(user.id)
        return data
