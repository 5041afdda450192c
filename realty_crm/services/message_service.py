"""
Messages and announcements shown on the updates page
"""

import logging
from datetime import datetime
from typing import Dict, List

from realty_crm.exceptions import AuthorizationError, DataValidationError, RecordNotFoundError
from realty_crm.models import db
from realty_crm.models.message import ALL_ADMINS, ALL_PARTNERS, ALL_SELLERS, Message
from realty_crm.models.user import User

logger = logging.getLogger(__name__)

MESSAGE_TYPES = ('announcement', 'to_partner', 'to_seller')

ANNOUNCEMENT_GROUPS = {
    'partner': [(ALL_PARTNERS, 'All Partners')],
    'seller': [(ALL_SELLERS, 'All Sellers')],
    'both': [(ALL_PARTNERS, 'All Partners'), (ALL_SELLERS, 'All Sellers')],
}


def recipient_ids_for(user: User) -> List[str]:
    """The user's own id plus the announcement groups they belong to"""
    recipient_ids = [user.id]
    if user.is_admin:
        recipient_ids += [ALL_ADMINS, ALL_PARTNERS, ALL_SELLERS]
    elif user.is_partner:
        recipient_ids.append(ALL_PARTNERS)
    elif user.role == 'seller':
        recipient_ids.append(ALL_SELLERS)
    return recipient_ids


class MessageService:
    """Service for messages"""

    def send_message(self, sender: User, data: Dict) -> List[Message]:
        """Send a direct message or an announcement; returns the stored messages.

        Announcements to both partners and sellers are stored once per group.
        """
        message_type = data.get('message_type')
        subject = (data.get('subject') or '').strip()
        body = (data.get('body') or data.get('details') or '').strip()
        if message_type not in MESSAGE_TYPES:
            raise DataValidationError("Please select a message type.", 'message_type', message_type)
        if not subject:
            raise DataValidationError("Subject is required.", 'subject')
        if not body:
            raise DataValidationError("Details are required.", 'body')

        if message_type == 'announcement':
            if not sender.is_admin:
                raise AuthorizationError("Only admins can send announcements.")
            groups = ANNOUNCEMENT_GROUPS.get(data.get('announcement_type'))
            if groups is None:
                raise DataValidationError("Please select an announcement type.", 'announcement_type',
                                          data.get('announcement_type'))
            recipients = groups
        else:
            if not (sender.is_admin or sender.role == 'seller'):
                raise AuthorizationError("You do not have permission to send messages.")
            recipients = [self._direct_recipient(message_type, data.get('recipient_id'))]

        now = datetime.utcnow()
        messages = []
        for recipient_id, recipient_name in recipients:
            message = Message(
                sender_id=sender.id,
                sender_name=sender.name,
                recipient_id=recipient_id,
                recipient_name=recipient_name,
                subject=subject,
                body=body,
                date=now,
                is_announcement=message_type == 'announcement',
                read_by={},
            )
            db.session.add(message)
            messages.append(message)
        db.session.commit()

        logger.info(f"{sender.id} sent '{subject}' to {', '.join(r for r, _ in recipients)}")
        return messages

    @staticmethod
    def _direct_recipient(message_type: str, recipient_id: str):
        if not recipient_id or not recipient_id.strip():
            raise DataValidationError("Recipient ID is required.", 'recipient_id')

        recipient = db.session.get(User, recipient_id.strip())
        if message_type == 'to_partner':
            if recipient is None or not recipient.is_partner:
                raise RecordNotFoundError('Partner', recipient_id)
        elif recipient is None or recipient.role != 'seller':
            raise RecordNotFoundError('Seller', recipient_id)
        return recipient.id, recipient.name

    def inbox(self, user: User) -> List[Message]:
        return (Message.query
                .filter(Message.recipient_id.in_(recipient_ids_for(user)))
                .order_by(Message.date.desc(), Message.id.desc())
                .all())

    def sent(self, user: User) -> List[Message]:
        return Message.query.filter_by(sender_id=user.id).order_by(Message.date.desc(), Message.id.desc()).all()

    def mark_read(self, user: User, message_id: int) -> Message:
        message = db.session.get(Message, message_id)
        if message is None or message.recipient_id not in recipient_ids_for(user):
            raise RecordNotFoundError('Message', message_id)

        # Reassign so the JSON column is flagged as changed
        message.read_by = {**(message.read_by or {}), user.id: True}
        db.session.commit()
        return message
