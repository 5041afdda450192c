"""
Wallet, withdrawal and billing ledger models
"""

from datetime import datetime
from realty_crm.models import db
from realty_crm.models.base import BaseModel

class WalletTransaction(BaseModel):
    """Audit record of every wallet balance change"""
    __tablename__ = 'wallet_transactions'
    
    user_id = db.Column(db.String(40), db.ForeignKey('users.id'), nullable=False, index=True)
    amount = db.Column(db.Float, nullable=False)
    type = db.Column(db.String(30), nullable=False)
    status = db.Column(db.String(20), default='Completed')
    performed_by = db.Column(db.String(40), nullable=True)
    notes = db.Column(db.Text, nullable=True)
    
    user = db.relationship('User', foreign_keys=[user_id])

class WithdrawalRequest(BaseModel):
    """Request by a partner or seller to withdraw wallet balance"""
    __tablename__ = 'withdrawal_requests'
    
    user_id = db.Column(db.String(40), db.ForeignKey('users.id'), nullable=False, index=True)
    user_name = db.Column(db.String(200), nullable=False)
    amount = db.Column(db.Float, nullable=False)
    status = db.Column(db.String(20), default='Pending', nullable=False)
    requested_at = db.Column(db.DateTime, default=datetime.utcnow)
    processed_at = db.Column(db.DateTime, nullable=True)
    processed_by = db.Column(db.String(40), nullable=True)
    notes = db.Column(db.Text, nullable=True)

class Receivable(BaseModel):
    """Amount the business expects to receive"""
    __tablename__ = 'receivables'
    
    user_id = db.Column(db.String(40), nullable=False)
    user_name = db.Column(db.String(200), nullable=True)
    amount = db.Column(db.Float, nullable=False)
    date = db.Column(db.DateTime, default=datetime.utcnow)
    status = db.Column(db.String(20), default='Pending', nullable=False)
    notes = db.Column(db.Text, nullable=True)

class Payable(BaseModel):
    """Manually entered amount owed to a user, outside the earning rules"""
    __tablename__ = 'payables'
    
    user_id = db.Column(db.String(40), nullable=False)
    user_name = db.Column(db.String(200), nullable=True)
    amount = db.Column(db.Float, nullable=False)
    date = db.Column(db.DateTime, default=datetime.utcnow)
    status = db.Column(db.String(20), default='Pending', nullable=False)
    notes = db.Column(db.Text, nullable=True)
