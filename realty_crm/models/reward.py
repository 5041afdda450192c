"""
Reward point models
"""

from datetime import datetime
from realty_crm.models import db
from realty_crm.models.base import BaseModel

class RewardOffer(BaseModel):
    """Offer partners can redeem reward points against"""
    __tablename__ = 'reward_offers'
    
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=True)
    points = db.Column(db.Integer, nullable=False)
    image_file_id = db.Column(db.String(40), nullable=True)
    is_active = db.Column(db.Boolean, default=True)

class RewardTransaction(BaseModel):
    """History of points sent by admins and claimed by partners"""
    __tablename__ = 'reward_transactions'
    
    user_id = db.Column(db.String(40), db.ForeignKey('users.id'), nullable=False, index=True)
    user_name = db.Column(db.String(200), nullable=True)
    points = db.Column(db.Integer, nullable=False)
    type = db.Column(db.String(20), nullable=False)
    date = db.Column(db.DateTime, default=datetime.utcnow)
    performed_by = db.Column(db.String(40), nullable=True)
