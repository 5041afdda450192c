"""
Resource center models
"""

from realty_crm.models import db
from realty_crm.models.base import BaseModel

CONTENT_TYPES = ['article', 'video', 'faq', 'terms_condition']

class ResourceCategory(db.Model):
    """Grouping shown as a tab in the resource center"""
    __tablename__ = 'resource_categories'
    
    id = db.Column(db.String(40), primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    
    def to_dict(self):
        return {'id': self.id, 'name': self.name}

class Resource(BaseModel):
    """Help article, video or FAQ list published by admins"""
    __tablename__ = 'resources'
    
    id = db.Column(db.String(40), primary_key=True)
    title = db.Column(db.String(300), nullable=False)
    category_id = db.Column(db.String(40), nullable=True, index=True)
    content_type = db.Column(db.String(30), nullable=False)
    feature_image_file_id = db.Column(db.String(40), nullable=True)
    
    # Only the field matching content_type is set
    article_content = db.Column(db.Text, nullable=True)
    video_url = db.Column(db.String(500), nullable=True)
    faqs = db.Column(db.JSON, nullable=True)
