# realty_crm/models/__init__.py
"""
Database models package
Exports all models and database instance
"""

from flask_sqlalchemy import SQLAlchemy

# Global database instance
db = SQLAlchemy()

def init_db(app):
    """Initialize database with app"""
    db.init_app(app)

# Import all models
from .user import User
from .property import Property
from .lead import Lead
from .appointment import Appointment
from .wallet import WalletTransaction, WithdrawalRequest, Receivable, Payable
from .reward import RewardOffer, RewardTransaction
from .app_setting import AppSetting
from .stored_file import StoredFile
from .support_ticket import SupportTicket
from .team_request import TeamRequest
from .requirement import Requirement
from .resource import Resource, ResourceCategory
from .message import Message

__all__ = [
    'db', 'init_db',
    'User', 'Property', 'Lead', 'Appointment',
    'WalletTransaction', 'WithdrawalRequest', 'Receivable', 'Payable',
    'RewardOffer', 'RewardTransaction', 'AppSetting', 'StoredFile',
    'SupportTicket', 'TeamRequest', 'Requirement', 'Resource', 'ResourceCategory', 'Message'
]
