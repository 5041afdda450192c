"""
Payment gateway controller: pay-page initiation and gateway callback
"""

import logging

from flask import request, jsonify, redirect
from realty_crm.controllers.base import BaseController
from realty_crm.exceptions import DataValidationError, PaymentGatewayError
from realty_crm.models import db
from realty_crm.models.user import User
from realty_crm.services.payment_gateway import (PaymentGatewayService, PAYMENT_SUCCESS,
                                                 GENERIC_INITIATION_ERROR)

logger = logging.getLogger(__name__)

class PaymentController(BaseController):
    """Handles payment gateway endpoints"""

    def register_routes(self):
        """Register payment routes"""
        # The gateway posts the callback without a session
        self.app.add_url_rule('/api/payment/initiate', 'payment.initiate',
                              self.initiate, methods=['POST'])
        self.app.add_url_rule('/api/payment/callback', 'payment.callback',
                              self.callback, methods=['POST'])

    def initiate(self):
        """Start a payment and return the gateway's JSON response"""
        data = request.get_json(silent=True) or {}

        try:
            response = PaymentGatewayService().initiate_payment(
                data.get('amount'),
                data.get('merchantTransactionId'),
                data.get('merchantUserId'),
                data.get('redirectUrl'),
            )
            return jsonify(response)
        except DataValidationError as e:
            return jsonify({'success': False, 'message': e.message}), 500
        except PaymentGatewayError as e:
            return jsonify(e.to_dict()), 500
        except Exception as e:
            logger.exception(f"Payment initiation failed: {e}")
            return jsonify({'success': False, 'message': GENERIC_INITIATION_ERROR}), 500

    def callback(self):
        """Record a successful registration payment and send the browser on"""
        try:
            code = request.form.get('code')
            transaction_id = request.form.get('transactionId')
            provider_reference_id = request.form.get('providerReferenceId')

            merchant_transaction_id = request.args.get('merchantTransactionId')
            user_id = PaymentGatewayService.user_id_from_transaction(merchant_transaction_id)

            if code != PAYMENT_SUCCESS or not user_id:
                logger.info(f"Payment {merchant_transaction_id} not successful: {code}")
                return redirect('/manage-partner/add?payment=failed')

            user = db.session.get(User, user_id)
            if user is None:
                logger.warning(f"Payment callback for unknown user {user_id}")
                return redirect('/manage-partner?payment=failed&reason=nodata')

            user.payment_status = 'paid'
            user.payment_transaction_id = transaction_id or merchant_transaction_id
            user.provider_reference_id = provider_reference_id
            db.session.commit()

            logger.info(f"Registration payment recorded for {user_id}")
            return redirect('/manage-partner?payment=success')

        except Exception as e:
            db.session.rollback()
            logger.exception(f"Callback handling error: {e}")
            return redirect('/manage-partner/add?payment=error')
