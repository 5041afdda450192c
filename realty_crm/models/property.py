"""
Property listing model
"""

from realty_crm.models import db
from realty_crm.models.base import BaseModel

class Property(BaseModel):
    """Property listing with optional per-role earning rule overrides"""
    __tablename__ = 'properties'
    
    STATUSES = ['Pending Verification', 'For Sale', 'Under Contract', 'Sold']
    
    status = db.Column(db.String(50), default='Pending Verification', nullable=False)
    owner_id = db.Column(db.String(40), nullable=True)
    
    catalog_title = db.Column(db.String(300), nullable=False)
    catalog_type = db.Column(db.String(50), nullable=True)
    property_category = db.Column(db.String(50), nullable=True)
    property_type_id = db.Column(db.String(50), nullable=True)
    overview = db.Column(db.Text, nullable=True)
    feature_image_id = db.Column(db.String(40), nullable=True)
    
    built_up_area = db.Column(db.Float, nullable=True)
    carpet_area = db.Column(db.Float, nullable=True)
    super_built_up_area = db.Column(db.Float, nullable=True)
    unit_of_measurement = db.Column(db.String(20), default='sq. ft')
    bedrooms = db.Column(db.Integer, nullable=True)
    bathrooms = db.Column(db.Integer, nullable=True)
    amenities = db.Column(db.JSON, nullable=True)
    
    locality = db.Column(db.String(200), nullable=True)
    address_line = db.Column(db.String(500), nullable=True)
    city = db.Column(db.String(100), nullable=True)
    state = db.Column(db.String(100), nullable=True)
    country = db.Column(db.String(100), default='India')
    pincode = db.Column(db.String(20), nullable=True)
    
    listing_price = db.Column(db.Float, nullable=False, default=0.0)
    price_type = db.Column(db.String(20), default='fixed')
    listed_by = db.Column(db.String(20), nullable=True)
    
    # Keyed by partner role, e.g. {"affiliate": {"type": "flat_amount", "value": 5000}}
    earning_rules = db.Column(db.JSON, nullable=True)
    
    views = db.Column(db.Integer, default=0)
    modification_notes = db.Column(db.Text, nullable=True)
    
    def get_earning_rules(self) -> dict:
        return dict(self.earning_rules or {})
    
    def to_summary(self):
        """Short form embedded in other records"""
        return {
            'id': self.id,
            'catalog_title': self.catalog_title,
            'city': self.city,
            'listing_price': self.listing_price,
        }
