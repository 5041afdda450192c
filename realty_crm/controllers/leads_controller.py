"""
Leads, deals and appointments controller
"""

from flask import request, jsonify
from realty_crm.controllers.base import BaseController
from realty_crm.exceptions import AuthorizationError
from realty_crm.models.lead import CLOSING_STATUSES, LEAD_STATUS_OPTIONS, DEAL_STATUS_OPTIONS
from realty_crm.services.lead_service import LeadService, AppointmentService

class LeadsController(BaseController):
    """Handles lead and appointment routes"""

    def register_routes(self):
        """Register lead routes"""
        self.lead_service = LeadService()
        self.appointment_service = AppointmentService()

        self.app.add_url_rule('/api/leads', 'leads.list',
                              self.login_required(self.list_leads), methods=['GET'])
        self.app.add_url_rule('/api/leads', 'leads.create',
                              self.login_required(self.create_lead), methods=['POST'])
        self.app.add_url_rule('/api/leads/status-options', 'leads.status_options',
                              self.login_required(self.status_options), methods=['GET'])
        self.app.add_url_rule('/api/leads/<int:lead_id>/status', 'leads.status',
                              self.login_required(self.update_status), methods=['PUT'])
        self.app.add_url_rule('/api/leads/<int:lead_id>/deal-status', 'leads.deal_status',
                              self.login_required(self.update_deal_status), methods=['PUT'])
        self.app.add_url_rule('/api/leads/<int:lead_id>/forward', 'leads.forward',
                              self.login_required(self.forward_lead), methods=['POST'])
        self.app.add_url_rule('/api/leads/<int:lead_id>/retake', 'leads.retake',
                              self.login_required(self.retake_lead), methods=['POST'])
        self.app.add_url_rule('/api/leads/<int:lead_id>/close', 'leads.close',
                              self.admin_required(self.close_deal), methods=['POST'])

        # Appointments
        self.app.add_url_rule('/api/appointments', 'appointments.list',
                              self.login_required(self.list_appointments), methods=['GET'])
        self.app.add_url_rule('/api/leads/<int:lead_id>/appointments', 'appointments.create',
                              self.login_required(self.schedule_appointment), methods=['POST'])
        self.app.add_url_rule('/api/appointments/<int:appointment_id>/status', 'appointments.status',
                              self.login_required(self.update_appointment_status), methods=['PUT'])

    def list_leads(self):
        """Partners only see the leads assigned to them"""
        user = self.get_current_user()
        partner_id = request.args.get('partner_id') if user.is_admin else user.id
        leads = self.lead_service.list_leads(request.args.get('status'), partner_id)
        return jsonify({'success': True, 'leads': [lead.to_dict() for lead in leads]})

    def create_lead(self):
        user = self.get_current_user()
        lead = self.lead_service.create_lead(self.get_json(), partner_id=None if user.is_admin else user.id)
        return jsonify({'success': True, 'lead': lead.to_dict()}), 201

    def status_options(self):
        return jsonify({
            'success': True,
            'statuses': LEAD_STATUS_OPTIONS,
            'dealStatuses': DEAL_STATUS_OPTIONS
        })

    def _check_lead_access(self, lead_id):
        """Partners may only change the leads assigned to them"""
        user = self.get_current_user()
        lead = self.lead_service.get_lead(lead_id)
        if not user.is_admin and lead.partner_id != user.id:
            raise AuthorizationError("You can only update your own leads.")
        return user

    def update_status(self, lead_id):
        user = self._check_lead_access(lead_id)
        status = self.get_json().get('status')
        if status in CLOSING_STATUSES and not user.is_admin:
            raise AuthorizationError("Only an admin can close a deal.")
        lead = self.lead_service.update_status(lead_id, status)
        return jsonify({'success': True, 'lead': lead.to_dict()})

    def update_deal_status(self, lead_id):
        self._check_lead_access(lead_id)
        lead = self.lead_service.update_deal_status(lead_id, self.get_json().get('deal_status'))
        return jsonify({'success': True, 'lead': lead.to_dict()})

    def forward_lead(self, lead_id):
        self._check_lead_access(lead_id)
        copy = self.lead_service.forward_lead(lead_id, self.get_json().get('partner_id'))
        return jsonify({'success': True, 'lead': copy.to_dict()}), 201

    def retake_lead(self, lead_id):
        self._check_lead_access(lead_id)
        lead = self.lead_service.retake_lead(lead_id)
        return jsonify({'success': True, 'lead': lead.to_dict()})

    def close_deal(self, lead_id):
        data = self.get_json()
        lead = self.lead_service.close_deal(lead_id, data.get('closing_amount'), data.get('closed_at'))
        return jsonify({'success': True, 'lead': lead.to_dict()})

    def list_appointments(self):
        user = self.get_current_user()
        partner_id = request.args.get('partner_id') if user.is_admin else user.id
        appointments = self.appointment_service.list_appointments(partner_id)
        return jsonify({'success': True, 'appointments': [a.to_dict() for a in appointments]})

    def schedule_appointment(self, lead_id):
        self._check_lead_access(lead_id)
        data = self.get_json()
        appointment = self.appointment_service.schedule(lead_id, data.get('visit_date'), data.get('notes'))
        return jsonify({'success': True, 'appointment': appointment.to_dict()}), 201

    def update_appointment_status(self, appointment_id):
        user = self.get_current_user()
        appointment = self.appointment_service.get_appointment(appointment_id)
        if not user.is_admin and appointment.partner_id != user.id:
            raise AuthorizationError("You can only update your own appointments.")
        appointment = self.appointment_service.update_status(appointment_id, self.get_json().get('status'))
        return jsonify({'success': True, 'appointment': appointment.to_dict()})
