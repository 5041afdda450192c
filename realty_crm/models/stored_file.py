"""
Uploaded file stored inline as base64
"""

from realty_crm.models import db
from realty_crm.models.base import BaseModel

class StoredFile(BaseModel):
    """File contents kept in the database, keyed by a generated FILE id"""
    __tablename__ = 'files'
    
    id = db.Column(db.String(40), primary_key=True)
    file_name = db.Column(db.String(300), nullable=True)
    content_type = db.Column(db.String(100), default='application/octet-stream')
    data = db.Column(db.Text, nullable=False)
    uploaded_by = db.Column(db.String(40), nullable=True)
    
    def to_dict(self, include_data=True):
        data = super().to_dict()
        if not include_data:
            data.pop('data', None)
        return data
