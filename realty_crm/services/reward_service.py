"""
Reward points: offers, admin grants and partner claims
"""

import logging
from typing import List

from realty_crm.config import config_manager
from realty_crm.exceptions import DataValidationError, InsufficientFundsError, RecordNotFoundError
from realty_crm.models import db
from realty_crm.models.reward import RewardOffer, RewardTransaction
from realty_crm.models.user import User

logger = logging.getLogger(__name__)

SENT = 'Sent'
CLAIMED = 'Claimed'


def _parse_points(points) -> int:
    try:
        points = int(points)
    except (TypeError, ValueError):
        raise DataValidationError("Points must be a whole number.", 'points', points)
    if points < 1:
        raise DataValidationError("Points must be at least 1.", 'points', points)
    return points


class RewardService:
    """Service for reward points"""

    def send_points(self, admin: User, partner_id: str, points) -> RewardTransaction:
        points = _parse_points(points)
        partner = db.session.get(User, partner_id)
        if partner is None or not partner.is_partner:
            raise RecordNotFoundError('Partner', partner_id)

        try:
            partner.reward_balance = (partner.reward_balance or 0) + points
            transaction = RewardTransaction(
                user_id=partner.id,
                user_name=partner.name,
                points=points,
                type=SENT,
                performed_by=admin.id,
            )
            db.session.add(transaction)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        logger.info(f"{points} reward points sent to {partner.id} by {admin.id}")
        return transaction

    def claim_points(self, user: User, points) -> RewardTransaction:
        """Convert reward points into wallet balance"""
        points = _parse_points(points)
        available = user.reward_balance or 0
        if points > available:
            raise InsufficientFundsError(available, points, 'reward points')

        point_value = config_manager.get_app_config('REWARD_POINT_VALUE', 1.0)
        try:
            user.reward_balance = available - points
            user.wallet_balance = (user.wallet_balance or 0) + points * point_value
            transaction = RewardTransaction(
                user_id=user.id,
                user_name=user.name,
                points=points,
                type=CLAIMED,
                performed_by=user.id,
            )
            db.session.add(transaction)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        logger.info(f"{user.id} claimed {points} reward points")
        return transaction

    def history(self, user: User, transaction_type: str = None) -> List[RewardTransaction]:
        query = RewardTransaction.query
        if not user.is_admin:
            query = query.filter_by(user_id=user.id)
        if transaction_type:
            query = query.filter_by(type=transaction_type)
        return query.order_by(RewardTransaction.date.desc()).all()

    def list_offers(self, active_only: bool = True) -> List[RewardOffer]:
        query = RewardOffer.query
        if active_only:
            query = query.filter_by(is_active=True)
        return query.order_by(RewardOffer.created_at.desc()).all()

    def create_offer(self, title: str, points, description: str = None,
                     image_file_id: str = None) -> RewardOffer:
        if not title or not title.strip():
            raise DataValidationError("Title is required.", 'title')
        offer = RewardOffer(
            title=title.strip(),
            description=description,
            points=_parse_points(points),
            image_file_id=image_file_id,
            is_active=True,
        )
        return offer.save()
