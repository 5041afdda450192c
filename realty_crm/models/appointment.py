"""
Site visit appointment model
"""

from realty_crm.models import db
from realty_crm.models.base import BaseModel

class Appointment(BaseModel):
    """Scheduled site visit for a lead"""
    __tablename__ = 'appointments'
    
    lead_id = db.Column(db.Integer, nullable=False, index=True)
    property_id = db.Column(db.Integer, nullable=True)
    partner_id = db.Column(db.String(40), nullable=True, index=True)
    visit_date = db.Column(db.DateTime, nullable=False)
    status = db.Column(db.String(30), default='Scheduled', nullable=False)
    notes = db.Column(db.Text, nullable=True)
