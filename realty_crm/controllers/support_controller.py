"""
Support tickets, teams, files and OTP controller
"""

from flask import request, jsonify, send_file
import io
from realty_crm.controllers.base import BaseController
from realty_crm.services.support_service import SupportService
from realty_crm.services.team_service import TeamService
from realty_crm.services.file_service import FileService
from realty_crm.services.otp_service import otp_service

class SupportController(BaseController):
    """Handles support ticket routes"""

    def register_routes(self):
        """Register support ticket routes"""
        self.support_service = SupportService()

        self.app.add_url_rule('/api/support-tickets', 'support.list',
                              self.login_required(self.list_tickets), methods=['GET'])
        self.app.add_url_rule('/api/support-tickets', 'support.create',
                              self.login_required(self.create_ticket), methods=['POST'])
        self.app.add_url_rule('/api/support-tickets/<int:ticket_id>', 'support.update',
                              self.admin_required(self.update_ticket), methods=['PUT'])

    def list_tickets(self):
        tickets = self.support_service.list_tickets(self.get_current_user(), request.args.get('status'))
        return jsonify({'success': True, 'tickets': [t.to_dict() for t in tickets]})

    def create_ticket(self):
        ticket = self.support_service.create_ticket(self.get_current_user(), self.get_json())
        return jsonify({'success': True, 'ticket': ticket.to_dict()}), 201

    def update_ticket(self, ticket_id):
        data = self.get_json()
        ticket = self.support_service.update_status(
            self.get_current_user(), ticket_id, data.get('status'), data.get('admin_reply'))
        return jsonify({'success': True, 'ticket': ticket.to_dict()})


class TeamController(BaseController):
    """Handles team membership routes"""

    def register_routes(self):
        """Register team routes"""
        self.team_service = TeamService()

        self.app.add_url_rule('/api/team/members', 'team.members',
                              self.login_required(self.members), methods=['GET'])
        self.app.add_url_rule('/api/team/available', 'team.available',
                              self.login_required(self.available), methods=['GET'])
        self.app.add_url_rule('/api/team/requests', 'team.list_requests',
                              self.login_required(self.list_requests), methods=['GET'])
        self.app.add_url_rule('/api/team/requests', 'team.send_request',
                              self.login_required(self.send_request), methods=['POST'])
        self.app.add_url_rule('/api/team/requests/<int:request_id>', 'team.respond',
                              self.login_required(self.respond), methods=['PUT'])

    def members(self):
        members = self.team_service.get_team_members(self.get_current_user())
        return jsonify({'success': True, 'members': [m.to_summary() for m in members]})

    def available(self):
        partners = self.team_service.get_available_partners(self.get_current_user())
        return jsonify({'success': True, 'partners': [p.to_summary() for p in partners]})

    def list_requests(self):
        incoming = request.args.get('direction', 'incoming') != 'outgoing'
        team_requests = self.team_service.list_requests(self.get_current_user(), incoming,
                                                        request.args.get('status', 'pending'))
        return jsonify({'success': True, 'requests': [r.to_dict() for r in team_requests]})

    def send_request(self):
        team_request = self.team_service.send_request(
            self.get_current_user(), self.get_json().get('recipient_id'))
        return jsonify({'success': True, 'request': team_request.to_dict()}), 201

    def respond(self, request_id):
        team_request = self.team_service.respond(
            self.get_current_user(), request_id, self.get_json().get('status'))
        return jsonify({'success': True, 'request': team_request.to_dict()})


class FileController(BaseController):
    """Handles file upload and download routes"""

    def register_routes(self):
        """Register file routes"""
        self.file_service = FileService()

        self.app.add_url_rule('/api/files', 'files.upload',
                              self.login_required(self.upload), methods=['POST'])
        self.app.add_url_rule('/api/files/<file_id>', 'files.get',
                              self.login_required(self.get_file), methods=['GET'])
        self.app.add_url_rule('/api/files/<file_id>/download', 'files.download',
                              self.login_required(self.download), methods=['GET'])

    def upload(self):
        """Multipart 'file' field or JSON {data, file_name, content_type}"""
        user = self.get_current_user()
        if 'file' in request.files:
            stored = self.file_service.save_upload(request.files['file'], user.id)
        else:
            data = self.get_json()
            stored = self.file_service.save_base64(
                data.get('data'), data.get('file_name'), data.get('content_type'), user.id)
        return jsonify({'success': True, 'file': stored.to_dict(include_data=False)}), 201

    def get_file(self, file_id):
        stored = self.file_service.get_file(file_id)
        return jsonify({'success': True, 'file': stored.to_dict()})

    def download(self, file_id):
        stored = self.file_service.get_file(file_id)
        return send_file(
            io.BytesIO(self.file_service.get_bytes(file_id)),
            mimetype=stored.content_type,
            as_attachment=True,
            download_name=stored.file_name or stored.id
        )


class OTPController(BaseController):
    """Handles email one-time passcodes"""

    def register_routes(self):
        """Register OTP routes"""
        self.app.add_url_rule('/api/otp/send', 'otp.send', self.send, methods=['POST'])
        self.app.add_url_rule('/api/otp/verify', 'otp.verify', self.verify, methods=['POST'])

    def send(self):
        otp_service.send_otp(self.get_json().get('email'))
        return jsonify({'success': True, 'message': 'OTP sent'})

    def verify(self):
        data = self.get_json()
        if otp_service.verify_otp(data.get('email'), data.get('otp')):
            return jsonify({'success': True, 'verified': True})
        return jsonify({'success': False, 'verified': False, 'error': 'Invalid or expired OTP'}), 400
