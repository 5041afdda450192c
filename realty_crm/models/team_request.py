"""
Team membership request model
"""

from realty_crm.models import db
from realty_crm.models.base import BaseModel

class TeamRequest(BaseModel):
    """Invitation from a team lead to a partner to join their team"""
    __tablename__ = 'team_requests'
    
    requester_id = db.Column(db.String(40), db.ForeignKey('users.id'), nullable=False)
    requester_name = db.Column(db.String(200), nullable=True)
    recipient_id = db.Column(db.String(40), db.ForeignKey('users.id'), nullable=False, index=True)
    recipient_name = db.Column(db.String(200), nullable=True)
    status = db.Column(db.String(20), default='pending', nullable=False)
