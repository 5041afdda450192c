"""
Wallet balances, admin top-ups, withdrawals and receivables
"""

import logging
from datetime import datetime
from typing import Dict, List

from realty_crm.config import config_manager
from realty_crm.exceptions import (AuthorizationError, DataValidationError, InsufficientFundsError,
                                   RecordNotFoundError)
from realty_crm.models import db
from realty_crm.models.lead import CLOSING_STATUSES, Lead
from realty_crm.models.user import User
from realty_crm.models.wallet import Payable, Receivable, WalletTransaction, WithdrawalRequest
from realty_crm.services.analytics import closed_deal_revenue
from realty_crm.utils import validate_currency

logger = logging.getLogger(__name__)

WITHDRAWAL_STATUSES = ('Pending', 'Approved', 'Rejected')


def _parse_amount(amount, minimum: float = 0.01) -> float:
    is_valid, value = validate_currency(amount)
    if not is_valid:
        raise DataValidationError("Amount must be a positive number.", 'amount', amount)
    amount = round(value, 2)
    if amount < minimum:
        raise DataValidationError(f"Amount must be at least {minimum:g}.", 'amount', amount)
    return amount


class WalletService:
    """Service for wallet and billing operations"""

    def get_summary(self, user: User) -> Dict:
        """Balances and totals shown on the wallet page"""
        closed_leads = Lead.query.filter(Lead.status.in_(CLOSING_STATUSES))
        if not user.is_admin:
            closed_leads = closed_leads.filter_by(partner_id=user.id)
        revenue = closed_deal_revenue(closed_leads.all())

        receivables = Receivable.query
        payables = Payable.query
        if not user.is_admin:
            receivables = receivables.filter_by(user_id=user.id)
            payables = payables.filter_by(user_id=user.id)

        return {
            'balance': round(user.wallet_balance or 0, 2),
            'reward_points': user.reward_balance or 0,
            'total_revenue': revenue,
            'total_receivable': round(sum(r.amount for r in receivables.filter_by(status='Pending').all()), 2),
            'total_payable': round(sum(p.amount for p in payables.filter_by(status='Pending').all()), 2),
        }

    def top_up(self, admin: User, admin_password: str, amount, transaction_type: str = 'topup',
               recipient_id: str = None, payment_method: str = None) -> WalletTransaction:
        """Credit a wallet after re-checking the admin's password.

        A plain top-up credits the admin's own wallet; any other type needs a
        recipient.
        """
        if not admin.is_admin:
            raise AuthorizationError("Only admins can manage wallets.")
        if not admin.check_password(admin_password or ''):
            raise AuthorizationError("Incorrect password.")

        amount = _parse_amount(amount)

        if transaction_type == 'topup':
            recipient = admin
        elif recipient_id:
            recipient = db.session.get(User, recipient_id)
            if recipient is None:
                raise RecordNotFoundError('User', recipient_id)
        else:
            raise DataValidationError("Recipient required for this transaction type.", 'recipient_id')

        try:
            recipient.wallet_balance = (recipient.wallet_balance or 0) + amount
            transaction = WalletTransaction(
                user_id=recipient.id,
                amount=amount,
                type=transaction_type,
                status='Completed',
                performed_by=admin.id,
                notes=payment_method,
            )
            db.session.add(transaction)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        logger.info(f"Wallet {transaction_type} of {amount} for {recipient.id} by {admin.id}")
        return transaction

    def list_transactions(self, user: User) -> List[WalletTransaction]:
        query = WalletTransaction.query
        if not user.is_admin:
            query = query.filter_by(user_id=user.id)
        return query.order_by(WalletTransaction.created_at.desc()).all()

    def request_withdrawal(self, user: User, amount, notes: str = None) -> WithdrawalRequest:
        minimum = config_manager.get_app_config('MIN_WITHDRAWAL_AMOUNT', 100)
        amount = _parse_amount(amount, minimum)

        withdrawal = WithdrawalRequest(
            user_id=user.id,
            user_name=user.name,
            amount=amount,
            notes=notes,
            status='Pending',
        )
        withdrawal.save()
        logger.info(f"Withdrawal request {withdrawal.id} of {amount} by {user.id}")
        return withdrawal

    def list_withdrawals(self, user: User) -> List[WithdrawalRequest]:
        query = WithdrawalRequest.query
        if not user.is_admin:
            query = query.filter_by(user_id=user.id)
        return query.order_by(WithdrawalRequest.requested_at.desc()).all()

    def process_withdrawal(self, admin: User, request_id: int, new_status: str) -> WithdrawalRequest:
        """Approve or reject a pending request; approval debits the wallet"""
        if new_status not in ('Approved', 'Rejected'):
            raise DataValidationError("Status must be Approved or Rejected.", 'status', new_status)

        withdrawal = db.session.get(WithdrawalRequest, request_id)
        if withdrawal is None:
            raise RecordNotFoundError('Withdrawal request', request_id)
        if withdrawal.status != 'Pending':
            raise DataValidationError(f"Request has already been {withdrawal.status.lower()}.",
                                      'status', withdrawal.status)

        if new_status == 'Approved':
            user = db.session.get(User, withdrawal.user_id)
            if user is None:
                raise RecordNotFoundError('User', withdrawal.user_id)
            balance = user.wallet_balance or 0
            if balance < withdrawal.amount:
                raise InsufficientFundsError(balance, withdrawal.amount)
            user.wallet_balance = balance - withdrawal.amount
            db.session.add(WalletTransaction(
                user_id=user.id,
                amount=-withdrawal.amount,
                type='withdrawal',
                status='Completed',
                performed_by=admin.id,
            ))

        withdrawal.status = new_status
        withdrawal.processed_at = datetime.utcnow()
        withdrawal.processed_by = admin.id
        try:
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        logger.info(f"Withdrawal request {request_id} {new_status.lower()} by {admin.id}")
        return withdrawal

    def list_receivables(self) -> List[Receivable]:
        return Receivable.query.order_by(Receivable.date.desc()).all()

    def add_receivable(self, user_id: str, amount, notes: str = None) -> Receivable:
        amount = _parse_amount(amount, 1)
        user = db.session.get(User, user_id)
        receivable = Receivable(
            user_id=user_id,
            user_name=user.name if user else f"User {user_id}",
            amount=amount,
            notes=notes,
            status='Pending',
        )
        return receivable.save()
