"""
PhonePe payment gateway integration service

Pay requests are base64 encoded JSON signed with the X-VERIFY checksum:
sha256(base64_payload + pay_path + salt_key) + '###' + salt_index
"""

import base64
import hashlib
import json
import logging
import math
from typing import Dict, Optional

import requests

from realty_crm.config import config_manager
from realty_crm.exceptions import DataValidationError, PaymentGatewayError

logger = logging.getLogger(__name__)

PAYMENT_SUCCESS = 'PAYMENT_SUCCESS'
GENERIC_INITIATION_ERROR = 'An error occurred during payment initiation.'


class PaymentGatewayService:
    """Service for the payment gateway pay API"""

    def __init__(self, merchant_id: str = None, salt_key: str = None, salt_index: int = None,
                 pay_url: str = None, base_url: str = None, timeout: float = None):
        self.merchant_id = merchant_id or config_manager.get_app_config('PHONEPE_CLIENT_ID')
        self.salt_key = salt_key or config_manager.get_app_config('PHONEPE_CLIENT_SECRET')
        self.salt_index = salt_index or config_manager.get_app_config('PHONEPE_SALT_INDEX', 1)
        self.pay_url = pay_url or config_manager.get_app_config('PHONEPE_PAY_URL')
        self.pay_path = config_manager.get_app_config('PHONEPE_PAY_PATH', '/pg/v1/pay')
        self.base_url = (base_url or config_manager.get_app_config('BASE_URL', '')).rstrip('/')
        self.timeout = timeout or config_manager.get_app_config('PAYMENT_TIMEOUT_SECONDS', 30)

        self.headers = {
            "accept": "application/json",
            "Content-Type": "application/json",
        }

    def build_payload(self, amount, merchant_transaction_id: str, merchant_user_id: str,
                      redirect_url: str) -> Dict:
        """Gateway pay payload; the amount goes over the wire in paise"""
        return {
            'merchantId': self.merchant_id,
            'merchantTransactionId': merchant_transaction_id,
            'merchantUserId': merchant_user_id,
            'amount': int(round(float(amount) * 100)),
            'redirectUrl': redirect_url,
            'redirectMode': 'POST',
            'callbackUrl': f"{self.base_url}/api/payment/callback",
            'mobileNumber': config_manager.get_app_config('PHONEPE_MOBILE_NUMBER'),
            'paymentInstrument': {
                'type': 'PAY_PAGE',
            },
        }

    @staticmethod
    def encode_payload(payload: Dict) -> str:
        return base64.b64encode(json.dumps(payload).encode('utf-8')).decode('ascii')

    def compute_checksum(self, base64_payload: str) -> str:
        """X-VERIFY header value for a pay request"""
        digest = hashlib.sha256(f"{base64_payload}{self.pay_path}{self.salt_key}".encode('utf-8')).hexdigest()
        return f"{digest}###{self.salt_index}"

    def initiate_payment(self, amount, merchant_transaction_id: str, merchant_user_id: str,
                         redirect_url: str) -> Dict:
        """Start a pay-page payment and return the gateway's JSON response.

        Raises PaymentGatewayError carrying the gateway's message when the
        call fails.
        """
        self._validate_request(amount, merchant_transaction_id, merchant_user_id, redirect_url)

        payload = self.build_payload(amount, merchant_transaction_id, merchant_user_id, redirect_url)
        base64_payload = self.encode_payload(payload)
        headers = dict(self.headers)
        headers['X-VERIFY'] = self.compute_checksum(base64_payload)

        logger.info(f"Initiating payment {merchant_transaction_id} for user {merchant_user_id}")

        try:
            response = requests.post(
                self.pay_url,
                headers=headers,
                json={'request': base64_payload},
                timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Payment gateway request failed: {e}")
            raise PaymentGatewayError(GENERIC_INITIATION_ERROR)

        data = self._parse_json(response)

        if response.status_code >= 400:
            logger.error(f"Payment gateway error {response.status_code}: {data or response.text}")
            message = (data or {}).get('message') or GENERIC_INITIATION_ERROR
            raise PaymentGatewayError(message, response.status_code, data)

        if data is None:
            raise PaymentGatewayError(GENERIC_INITIATION_ERROR, response.status_code)

        return data

    def _validate_request(self, amount, merchant_transaction_id, merchant_user_id, redirect_url):
        try:
            amount_value = float(amount)
        except (TypeError, ValueError):
            raise DataValidationError("Amount must be a number", 'amount', amount)
        if not math.isfinite(amount_value) or amount_value <= 0:
            raise DataValidationError("Amount must be greater than zero", 'amount', amount)

        for field, value in (('merchantTransactionId', merchant_transaction_id),
                             ('merchantUserId', merchant_user_id),
                             ('redirectUrl', redirect_url)):
            if not value:
                raise DataValidationError(f"{field} is required", field)

    @staticmethod
    def _parse_json(response) -> Optional[Dict]:
        try:
            return response.json()
        except ValueError:
            return None

    @staticmethod
    def user_id_from_transaction(merchant_transaction_id: Optional[str]) -> Optional[str]:
        """Transaction ids look like TX_<userId>_<timestamp>"""
        if not merchant_transaction_id:
            return None
        parts = merchant_transaction_id.split('_')
        if len(parts) < 2 or not parts[1]:
            return None
        return parts[1]
