"""
User model covering admins, sellers, customers and partners
"""

from werkzeug.security import check_password_hash
from realty_crm.models import db
from realty_crm.models.base import BaseModel
from realty_crm.config import ROLE_CONFIG

class User(BaseModel):
    """Marketplace user; the role decides what the account can do"""
    __tablename__ = 'users'
    
    # Prefixed ids such as PAF123456 or SEL654321
    id = db.Column(db.String(40), primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    first_name = db.Column(db.String(100), nullable=True)
    last_name = db.Column(db.String(100), nullable=True)
    email = db.Column(db.String(200), unique=True, nullable=False)
    phone = db.Column(db.String(30), nullable=True)
    whatsapp_number = db.Column(db.String(30), nullable=True)
    password_hash = db.Column(db.String(255), nullable=True)
    role = db.Column(db.String(50), nullable=False, default='user')
    status = db.Column(db.String(50), default='active')
    
    # Profile and business details
    profile_image = db.Column(db.Text, nullable=True)
    address = db.Column(db.String(500), nullable=True)
    city = db.Column(db.String(100), nullable=True)
    state = db.Column(db.String(100), nullable=True)
    pincode = db.Column(db.String(20), nullable=True)
    business_name = db.Column(db.String(200), nullable=True)
    business_type = db.Column(db.String(100), nullable=True)
    gstn = db.Column(db.String(50), nullable=True)
    area_covered = db.Column(db.String(200), nullable=True)
    
    # KYC
    aadhar_number = db.Column(db.String(20), nullable=True)
    aadhar_file_id = db.Column(db.String(40), nullable=True)
    pan_number = db.Column(db.String(20), nullable=True)
    pan_file_id = db.Column(db.String(40), nullable=True)
    kyc_status = db.Column(db.String(20), nullable=True)
    
    # Registration payment
    payment_status = db.Column(db.String(30), nullable=True)
    payment_transaction_id = db.Column(db.String(100), nullable=True)
    provider_reference_id = db.Column(db.String(100), nullable=True)
    
    # Lifecycle reasons
    deactivation_reason = db.Column(db.Text, nullable=True)
    reactivation_reason = db.Column(db.Text, nullable=True)
    rejection_reason = db.Column(db.Text, nullable=True)
    
    team_lead_id = db.Column(db.String(40), db.ForeignKey('users.id'), nullable=True)
    wallet_balance = db.Column(db.Float, default=0.0, nullable=False)
    reward_balance = db.Column(db.Integer, default=0, nullable=False)
    
    team_members = db.relationship('User', backref=db.backref('team_lead', remote_side=[id]))
    
    @property
    def is_admin(self) -> bool:
        return self.role == 'admin'
    
    @property
    def is_partner(self) -> bool:
        return ROLE_CONFIG.is_partner_role(self.role)
    
    @property
    def role_label(self) -> str:
        return ROLE_CONFIG.get_role_label(self.role)
    
    def check_password(self, password: str) -> bool:
        """Check a plaintext password against the stored hash"""
        if not self.password_hash:
            return False
        return check_password_hash(self.password_hash, password)
    
    def to_dict(self):
        """Convert to dictionary without credentials"""
        data = super().to_dict()
        data.pop('password_hash', None)
        data['role_label'] = self.role_label
        return data
    
    def to_summary(self):
        """Short form embedded in other records"""
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'role': self.role,
        }
    
    @classmethod
    def get_partners(cls, status=None):
        """Get all users holding a partner role"""
        query = cls.query.filter(cls.role.in_(list(ROLE_CONFIG.partner_roles)))
        if status:
            query = query.filter_by(status=status)
        return query.order_by(cls.created_at.desc()).all()
