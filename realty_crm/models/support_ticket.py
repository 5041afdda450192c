"""
Support ticket model
"""

from realty_crm.models import db
from realty_crm.models.base import BaseModel

class SupportTicket(BaseModel):
    """Help request raised by any signed-in user"""
    __tablename__ = 'support_tickets'
    
    STATUSES = ['Open', 'In Progress', 'Closed']
    
    user_id = db.Column(db.String(40), nullable=False, index=True)
    user_name = db.Column(db.String(200), nullable=True)
    subject = db.Column(db.String(300), nullable=False)
    message = db.Column(db.Text, nullable=False)
    category = db.Column(db.String(100), nullable=True)
    property_id = db.Column(db.Integer, nullable=True)
    status = db.Column(db.String(20), default='Open', nullable=False)
    admin_reply = db.Column(db.Text, nullable=True)
