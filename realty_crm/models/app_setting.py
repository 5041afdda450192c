"""
Key/value application settings (earning rules, fees, gateway switches)
"""

from datetime import datetime
from realty_crm.models import db
from realty_crm.models.base import BaseModel

class AppSetting(BaseModel):
    """Named JSON document of application settings"""
    __tablename__ = 'app_settings'
    
    key = db.Column(db.String(100), unique=True, nullable=False)
    value = db.Column(db.JSON, nullable=False, default=dict)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    @classmethod
    def get_value(cls, key, default=None):
        setting = cls.query.filter_by(key=key).first()
        if setting is None:
            return default
        return setting.value
    
    @classmethod
    def set_value(cls, key, value):
        """Create or replace a settings document"""
        setting = cls.query.filter_by(key=key).first()
        if setting:
            setting.value = value
        else:
            setting = cls(key=key, value=value)
            db.session.add(setting)
        db.session.commit()
        return setting
