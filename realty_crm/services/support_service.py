"""
Support tickets
"""

import logging
from typing import Dict, List

from realty_crm.exceptions import AuthorizationError, DataValidationError, RecordNotFoundError
from realty_crm.models import db
from realty_crm.models.support_ticket import SupportTicket
from realty_crm.models.user import User

logger = logging.getLogger(__name__)


class SupportService:

    def create_ticket(self, user: User, data: Dict) -> SupportTicket:
        subject = (data.get('subject') or '').strip()
        message = (data.get('message') or '').strip()
        if not subject:
            raise DataValidationError("Subject is required.", 'subject')
        if not message:
            raise DataValidationError("Message is required.", 'message')

        ticket = SupportTicket(
            user_id=user.id,
            user_name=user.name,
            subject=subject,
            message=message,
            category=data.get('category'),
            property_id=data.get('property_id'),
            status='Open',
        )
        ticket.save()
        logger.info(f"Support ticket {ticket.id} opened by {user.id}")
        return ticket

    def list_tickets(self, user: User, status: str = None) -> List[SupportTicket]:
        query = SupportTicket.query
        if not user.is_admin:
            query = query.filter_by(user_id=user.id)
        if status:
            query = query.filter_by(status=status)
        return query.order_by(SupportTicket.created_at.desc()).all()

    def update_status(self, user: User, ticket_id: int, status: str, reply: str = None) -> SupportTicket:
        if not user.is_admin:
            raise AuthorizationError("Only admins can update tickets.")
        if status not in SupportTicket.STATUSES:
            raise DataValidationError(f"Unknown ticket status: {status}", 'status', status)

        ticket = db.session.get(SupportTicket, ticket_id)
        if ticket is None:
            raise RecordNotFoundError('Support ticket', ticket_id)

        ticket.status = status
        if reply:
            ticket.admin_reply = reply
        db.session.commit()
        return ticket
