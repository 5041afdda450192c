"""
Buyer requirement model
"""

from realty_crm.models import db
from realty_crm.models.base import BaseModel

FURNISHING_OPTIONS = ['unfurnished', 'semi-furnished', 'fully-furnished']

class Requirement(BaseModel):
    """What a buyer is looking for, posted so partners can match listings"""
    __tablename__ = 'requirements'
    
    # Contact details are copied from the poster at submission time
    user_id = db.Column(db.String(40), nullable=False, index=True)
    user_name = db.Column(db.String(200), nullable=True)
    user_email = db.Column(db.String(200), nullable=True)
    user_phone = db.Column(db.String(30), nullable=True)
    
    property_type = db.Column(db.String(100), nullable=False)
    preferred_location = db.Column(db.String(200), nullable=False)
    min_budget = db.Column(db.Float, default=0.0, nullable=False)
    max_budget = db.Column(db.Float, default=0.0, nullable=False)
    min_size = db.Column(db.Float, default=0.0, nullable=False)
    max_size = db.Column(db.Float, default=0.0, nullable=False)
    furnishing = db.Column(db.String(30), default='unfurnished', nullable=False)
    amenities = db.Column(db.JSON, nullable=True)
