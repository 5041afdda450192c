"""
Lead model
"""

from realty_crm.models import db
from realty_crm.models.base import BaseModel

# Statuses that make a lead eligible for a partner payout
CLOSING_STATUSES = ('Deal closed', 'Completed')

LEAD_STATUS_OPTIONS = [
    'New lead', 'Contacted', 'Interested', 'Site visit scheduled', 'Site visited',
    'In negotiation', 'Booking confirmed', 'Deal closed', 'Follow-up required', 'Lost lead'
]

DEAL_STATUS_OPTIONS = [
    'New lead', 'Contacted', 'Interested', 'site visit scheduled', 'site visit done',
    'negotiation in progress', 'booking form filled', 'booking amount received',
    'property reserved', 'kyc documents collected', 'agreement drafted', 'agreement signed',
    'part payment pending', 'payment in progress', 'registration done',
    'handover/possession given', 'booking cancelled'
]

class Lead(BaseModel):
    """Enquiry linking a customer, a partner and a property"""
    __tablename__ = 'leads'
    
    name = db.Column(db.String(200), nullable=False)
    email = db.Column(db.String(200), nullable=True)
    phone = db.Column(db.String(30), nullable=True)
    city = db.Column(db.String(100), nullable=True)
    state = db.Column(db.String(100), nullable=True)
    country = db.Column(db.String(100), nullable=True)
    
    # Plain references: the referenced records may be deleted later
    property_id = db.Column(db.Integer, nullable=True, index=True)
    partner_id = db.Column(db.String(40), nullable=True, index=True)
    customer_id = db.Column(db.String(40), nullable=True)
    
    status = db.Column(db.String(50), default='New lead', nullable=False, index=True)
    deal_status = db.Column(db.String(50), default='New lead')
    closing_amount = db.Column(db.Float, nullable=True)
    closed_at = db.Column(db.DateTime, nullable=True)
    
    payout_status = db.Column(db.String(20), default='Pending', nullable=False)
    paid_at = db.Column(db.DateTime, nullable=True)
    
    forwarded_to = db.Column(db.JSON, nullable=True)
    is_copy = db.Column(db.Boolean, default=False)
    original_lead_id = db.Column(db.Integer, nullable=True)
    
    @property
    def is_closed(self) -> bool:
        return self.status in CLOSING_STATUSES
    
    def deal_value(self, listing_price=None) -> float:
        """Closing amount, falling back to the listing price of the property"""
        if self.closing_amount is not None:
            return self.closing_amount
        return listing_price or 0

    @classmethod
    def get_closed_leads(cls):
        """Leads whose status makes them payable, in creation order"""
        return cls.query.filter(cls.status.in_(CLOSING_STATUSES)).order_by(cls.id).all()
