"""
User accounts: authentication, registration and partner lifecycle
"""

import logging
import time
from typing import Dict, List, Optional, Tuple

from werkzeug.security import generate_password_hash

from realty_crm.config import ROLE_CONFIG
from realty_crm.exceptions import (AccountInactiveError, DataValidationError, InvalidCredentialsError,
                                   RecordNotFoundError)
from realty_crm.models import db
from realty_crm.models.user import User
from realty_crm.utils import (generate_unique_id, split_full_name, validate_email, validate_password,
                              validate_phone, validate_pincode)

logger = logging.getLogger(__name__)

BLOCKED_LOGIN_STATUSES = ('inactive', 'rejected', 'suspended')

ROLE_ID_PREFIXES = {
    'admin': 'ADM',
    'seller': 'SEL',
    'customer': 'CUS',
    'user': 'USR',
}

# Profile fields accepted from registration forms
PROFILE_FIELDS = (
    'phone', 'whatsapp_number', 'address', 'city', 'state', 'pincode',
    'business_name', 'business_type', 'gstn', 'area_covered',
    'aadhar_number', 'aadhar_file_id', 'pan_number', 'pan_file_id', 'profile_image',
)


def id_prefix_for_role(role: str) -> str:
    """Partners get P + first two letters of the role, e.g. PAF for affiliate"""
    if ROLE_CONFIG.is_partner_role(role):
        return 'P' + role[:2].upper()
    return ROLE_ID_PREFIXES.get(role, 'USR')


class UserService:
    """Service for user accounts"""

    def authenticate(self, email: str, password: str) -> User:
        """Check credentials and account status; returns the user"""
        if not email or not password:
            raise InvalidCredentialsError()

        user = User.query.filter_by(email=email.strip().lower()).first()
        if user is None:
            raise InvalidCredentialsError()

        if not user.password_hash:
            raise InvalidCredentialsError("This account does not have a password set.")

        if not user.check_password(password):
            raise InvalidCredentialsError()

        if user.status in BLOCKED_LOGIN_STATUSES:
            raise AccountInactiveError(user.status)

        logger.info(f"User {user.id} signed in")
        return user

    def create_user(self, name: str, email: str, password: Optional[str], role: str,
                    status: str = 'active', **profile) -> User:
        """Create any kind of account after validating the basics"""
        role = ROLE_CONFIG.normalize_role(role)
        if not name or not name.strip():
            raise DataValidationError("Name is required.", 'name')
        if not validate_email(email or ''):
            raise DataValidationError("Please enter a valid email address.", 'email', email)
        if password is not None and not validate_password(password):
            raise DataValidationError("Password must be at least 8 characters.", 'password')
        if profile.get('phone') and not validate_phone(profile['phone']):
            raise DataValidationError("Please enter a valid mobile number.", 'phone', profile['phone'])
        if profile.get('pincode') and not validate_pincode(str(profile['pincode'])):
            raise DataValidationError("Please enter a valid 6-digit pincode.", 'pincode', profile['pincode'])

        email = email.strip().lower()
        if User.query.filter_by(email=email).first():
            raise DataValidationError("An account with this email already exists.", 'email', email)

        first_name, last_name = split_full_name(name)
        user = User(
            id=generate_unique_id(id_prefix_for_role(role), lambda candidate: db.session.get(User, candidate) is not None),
            name=name.strip(),
            first_name=first_name,
            last_name=last_name,
            email=email,
            password_hash=generate_password_hash(password) if password else None,
            role=role,
            status=status,
        )
        for field in PROFILE_FIELDS:
            if profile.get(field) is not None:
                setattr(user, field, profile[field])

        user.save()
        logger.info(f"Created {role} account {user.id}")
        return user

    def register_partner(self, data: Dict) -> User:
        """Self sign-up for partners; an admin must approve the account"""
        role = ROLE_CONFIG.normalize_role(data.get('role'))
        if not ROLE_CONFIG.is_partner_role(role):
            raise DataValidationError("Please select a valid partner role.", 'role', data.get('role'))

        profile = {field: data.get(field) for field in PROFILE_FIELDS}
        return self.create_user(data.get('name'), data.get('email'), data.get('password'), role,
                                status='pending_approval', **profile)

    def register_seller(self, data: Dict) -> User:
        """Self sign-up for property sellers"""
        profile = {field: data.get(field) for field in PROFILE_FIELDS}
        return self.create_user(data.get('name'), data.get('email'), data.get('password'), 'seller',
                                status='pending_approval', **profile)

    def get_user(self, user_id: str) -> User:
        user = db.session.get(User, user_id)
        if user is None:
            raise RecordNotFoundError('User', user_id)
        return user

    def list_users(self, role: str = None, status: str = None) -> List[User]:
        query = User.query
        if role:
            query = query.filter_by(role=role)
        if status:
            query = query.filter_by(status=status)
        return query.order_by(User.created_at.desc()).all()


class PartnerService:
    """Partner onboarding and account status changes made by admins"""

    def __init__(self, user_service: UserService = None):
        self.user_service = user_service or UserService()

    def list_partners(self, status: str = None) -> List[User]:
        return User.get_partners(status)

    def create_partner(self, data: Dict, redirect_base: str = None) -> Tuple[User, Optional[Dict]]:
        """Admin onboarding of a partner.

        When payments are enabled and the role carries a registration fee,
        a pay-page payment is started and its gateway response returned;
        the callback later marks the partner as paid.
        """
        from realty_crm.services.settings_service import SettingsService
        from realty_crm.services.payment_gateway import PaymentGatewayService

        role = ROLE_CONFIG.normalize_role(data.get('role'))
        if not ROLE_CONFIG.is_partner_role(role):
            raise DataValidationError("Please select a valid partner role.", 'role', data.get('role'))

        profile = {field: data.get(field) for field in PROFILE_FIELDS}
        partner = self.user_service.create_user(data.get('name'), data.get('email'), data.get('password'),
                                                role, status='active', **profile)
        partner.payment_status = 'pending'
        db.session.commit()

        settings = SettingsService()
        fee = settings.get_registration_fees().get(role, 0)
        if not settings.is_payment_enabled() or fee <= 0:
            partner.payment_status = 'not_required'
            db.session.commit()
            return partner, None

        gateway = PaymentGatewayService()
        transaction_id = f"TX_{partner.id}_{int(time.time() * 1000)}"
        redirect_base = (redirect_base or gateway.base_url).rstrip('/')
        response = gateway.initiate_payment(
            fee,
            transaction_id,
            partner.id,
            f"{redirect_base}/manage-partner/add?payment_status=success&transaction_id={transaction_id}",
        )
        partner.payment_transaction_id = transaction_id
        db.session.commit()
        return partner, response

    def approve(self, partner_id: str) -> User:
        partner = self.get_partner(partner_id)
        partner.status = 'active'
        partner.rejection_reason = None
        db.session.commit()
        logger.info(f"Partner {partner_id} approved")
        return partner

    def reject(self, partner_id: str, reason: str) -> User:
        partner = self.get_partner(partner_id)
        partner.status = 'rejected'
        partner.rejection_reason = self._require_reason(reason)
        db.session.commit()
        logger.info(f"Partner {partner_id} rejected")
        return partner

    def deactivate(self, partner_id: str, reason: str) -> User:
        partner = self.get_partner(partner_id)
        partner.status = 'inactive'
        partner.deactivation_reason = self._require_reason(reason)
        db.session.commit()
        logger.info(f"Partner {partner_id} deactivated")
        return partner

    def reactivate(self, partner_id: str, reason: str) -> User:
        partner = self.get_partner(partner_id)
        partner.status = 'active'
        partner.reactivation_reason = self._require_reason(reason)
        db.session.commit()
        logger.info(f"Partner {partner_id} reactivated")
        return partner

    def suspend(self, partner_id: str, reason: str = None) -> User:
        partner = self.get_partner(partner_id)
        partner.status = 'suspended'
        if reason:
            partner.deactivation_reason = reason
        db.session.commit()
        logger.info(f"Partner {partner_id} suspended")
        return partner

    def get_partner(self, partner_id: str) -> User:
        partner = db.session.get(User, partner_id)
        if partner is None or not partner.is_partner:
            raise RecordNotFoundError('Partner', partner_id)
        return partner

    @staticmethod
    def _require_reason(reason: Optional[str]) -> str:
        if not reason or not reason.strip():
            raise DataValidationError("A reason is required.", 'reason')
        return reason.strip()
