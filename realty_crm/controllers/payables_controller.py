"""
Earning rules and payable ledger controller
"""

import io
import logging
from datetime import date

from flask import request, jsonify, send_file
from realty_crm.controllers.base import BaseController
from realty_crm.services.payable import PayableService
from realty_crm.services.report_service import ReportService
from realty_crm.services.settings_service import SettingsService

logger = logging.getLogger(__name__)

class PayablesController(BaseController):
    """Handles earning rule settings and partner payables"""

    def register_routes(self):
        """Register earning rule and payable routes"""
        self.settings_service = SettingsService()

        # Global default earning rules
        self.app.add_url_rule('/api/earning-rules/defaults', 'payables.get_default_rules',
                              self.admin_required(self.get_default_rules), methods=['GET'])
        self.app.add_url_rule('/api/earning-rules/defaults', 'payables.set_default_rules',
                              self.admin_required(self.set_default_rules), methods=['PUT'])

        # Registration fees and payment switch
        self.app.add_url_rule('/api/settings/registration-fees', 'payables.get_registration_fees',
                              self.admin_required(self.get_registration_fees), methods=['GET'])
        self.app.add_url_rule('/api/settings/registration-fees', 'payables.set_registration_fees',
                              self.admin_required(self.set_registration_fees), methods=['PUT'])

        # Ledger derived from closed deals
        self.app.add_url_rule('/api/payables/ledger', 'payables.ledger',
                              self.login_required(self.get_ledger), methods=['GET'])
        self.app.add_url_rule('/api/payables/ledger/export', 'payables.export_ledger',
                              self.admin_required(self.export_ledger), methods=['GET'])
        self.app.add_url_rule('/api/payables/ledger/<int:lead_id>/paid', 'payables.mark_paid',
                              self.admin_required(self.mark_paid), methods=['POST'])

        # Manually entered payables
        self.app.add_url_rule('/api/payables', 'payables.list_manual',
                              self.admin_required(self.list_manual_payables), methods=['GET'])
        self.app.add_url_rule('/api/payables', 'payables.add_manual',
                              self.admin_required(self.add_manual_payable), methods=['POST'])

    def get_default_rules(self):
        return jsonify({
            'success': True,
            'earningRules': self.settings_service.get_default_earning_rules()
        })

    def set_default_rules(self):
        data = self.get_json()
        rules = data.get('earningRules', data)
        merged = self.settings_service.set_default_earning_rules(rules)
        return jsonify({'success': True, 'earningRules': merged})

    def get_registration_fees(self):
        return jsonify({
            'success': True,
            'fees': self.settings_service.get_registration_fees(),
            'paymentEnabled': self.settings_service.is_payment_enabled()
        })

    def set_registration_fees(self):
        data = self.get_json()
        fees = self.settings_service.set_registration_fees(data.get('fees') or {})
        if 'paymentEnabled' in data:
            self.settings_service.set_payment_enabled(data['paymentEnabled'])
        return jsonify({
            'success': True,
            'fees': fees,
            'paymentEnabled': self.settings_service.is_payment_enabled()
        })

    def get_ledger(self):
        """Admins see every partner; partners only their own entries"""
        user = self.get_current_user()
        partner_id = request.args.get('partner_id') if user.is_admin else user.id
        ledger = PayableService().get_ledger(partner_id=partner_id)
        return jsonify({'success': True, **ledger})

    def export_ledger(self):
        """Download the payable ledger as an Excel workbook"""
        try:
            service = PayableService()
            entries = service.aggregator.build_ledger(partner_id=request.args.get('partner_id'))
            excel_bytes = ReportService().export_payable_ledger_excel(entries)

            filename = f"Payables_{date.today().strftime('%Y_%m_%d')}.xlsx"
            return send_file(
                io.BytesIO(excel_bytes),
                mimetype="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
                as_attachment=True,
                download_name=filename
            )
        except Exception as e:
            logger.exception(f"Ledger export failed: {e}")
            return jsonify({'success': False, 'error': 'Failed to export payables'}), 500

    def mark_paid(self, lead_id):
        lead = PayableService().mark_paid(lead_id)
        return jsonify({
            'success': True,
            'leadId': lead.id,
            'status': lead.payout_status,
            'paidAt': lead.paid_at.isoformat()
        })

    def list_manual_payables(self):
        payables = PayableService().list_manual_payables()
        return jsonify({'success': True, 'payables': [p.to_dict() for p in payables]})

    def add_manual_payable(self):
        data = self.get_json()
        try:
            amount = float(data.get('amount'))
        except (TypeError, ValueError):
            amount = None
        payable = PayableService().add_manual_payable(data.get('user_id'), amount, data.get('notes'))
        return jsonify({'success': True, 'payable': payable.to_dict()}), 201
