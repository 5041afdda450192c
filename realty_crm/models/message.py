"""
Message model
"""

from datetime import datetime
from realty_crm.models import db
from realty_crm.models.base import BaseModel

# Group recipients used for announcements
ALL_PARTNERS = 'ALL_PARTNERS'
ALL_SELLERS = 'ALL_SELLERS'
ALL_ADMINS = 'ALL_ADMINS'

class Message(BaseModel):
    """Direct message or announcement shown on the updates page"""
    __tablename__ = 'messages'
    
    sender_id = db.Column(db.String(40), nullable=False, index=True)
    sender_name = db.Column(db.String(200), nullable=True)
    recipient_id = db.Column(db.String(40), nullable=False, index=True)
    recipient_name = db.Column(db.String(200), nullable=True)
    subject = db.Column(db.String(300), nullable=False)
    body = db.Column(db.Text, nullable=False)
    date = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    is_announcement = db.Column(db.Boolean, default=False)
    read_by = db.Column(db.JSON, nullable=True)
    
    def is_read_by(self, user_id: str) -> bool:
        return bool((self.read_by or {}).get(user_id))
