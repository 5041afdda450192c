"""
Resource center: categories and the articles, videos and FAQs filed under them
"""

import logging
from typing import Dict, List, Optional

from realty_crm.exceptions import DataValidationError, RecordNotFoundError
from realty_crm.models import db
from realty_crm.models.resource import CONTENT_TYPES, Resource, ResourceCategory
from realty_crm.utils import generate_unique_id

logger = logging.getLogger(__name__)


def _clean_faqs(faqs) -> List[Dict[str, str]]:
    if not isinstance(faqs, list) or not faqs:
        raise DataValidationError("At least one FAQ is required.", 'faqs')

    cleaned = []
    for item in faqs:
        question = (item.get('question') or '').strip() if isinstance(item, dict) else ''
        answer = (item.get('answer') or '').strip() if isinstance(item, dict) else ''
        if not question or not answer:
            raise DataValidationError("Every FAQ needs a question and an answer.", 'faqs')
        cleaned.append({'question': question, 'answer': answer})
    return cleaned


class ResourceService:
    """Service for the resource center"""

    def list_categories(self) -> List[ResourceCategory]:
        return ResourceCategory.query.order_by(ResourceCategory.name).all()

    def create_category(self, name: str) -> ResourceCategory:
        name = (name or '').strip()
        if not name:
            raise DataValidationError("Category name is required.", 'name')

        category = ResourceCategory(
            id=generate_unique_id('CAT', lambda candidate: db.session.get(ResourceCategory, candidate) is not None),
            name=name,
        )
        db.session.add(category)
        db.session.commit()
        return category

    def delete_category(self, category_id: str):
        """Remove a category; its resources stay, uncategorized"""
        category = db.session.get(ResourceCategory, category_id)
        if category is None:
            raise RecordNotFoundError('Category', category_id)

        Resource.query.filter_by(category_id=category_id).update({'category_id': None})
        db.session.delete(category)
        db.session.commit()
        logger.info(f"Deleted resource category {category_id}")

    def list_resources(self, category_id: str = None) -> List[Resource]:
        query = Resource.query
        if category_id:
            query = query.filter_by(category_id=category_id)
        return query.order_by(Resource.created_at.desc()).all()

    def get_resource(self, resource_id: str) -> Resource:
        resource = db.session.get(Resource, resource_id)
        if resource is None:
            raise RecordNotFoundError('Resource', resource_id)
        return resource

    def save_resource(self, data: Dict, resource_id: Optional[str] = None,
                      feature_image_file_id: Optional[str] = None) -> Resource:
        """Create a resource, or replace the content of an existing one"""
        title = (data.get('title') or '').strip()
        content_type = data.get('content_type')
        category_id = data.get('category_id') or None
        if not title:
            raise DataValidationError("Title is required.", 'title')
        if content_type not in CONTENT_TYPES:
            raise DataValidationError(f"Unknown content type: {content_type}", 'content_type', content_type)
        if category_id and db.session.get(ResourceCategory, category_id) is None:
            raise RecordNotFoundError('Category', category_id)

        content = {'article_content': None, 'video_url': None, 'faqs': None}
        if content_type in ('article', 'terms_condition'):
            content['article_content'] = data.get('article_content') or ''
        elif content_type == 'video':
            content['video_url'] = (data.get('video_url') or '').strip()
            if not content['video_url']:
                raise DataValidationError("Video URL is required.", 'video_url')
        else:
            content['faqs'] = _clean_faqs(data.get('faqs'))

        if resource_id:
            resource = self.get_resource(resource_id)
        else:
            resource = Resource(
                id=generate_unique_id('RES', lambda candidate: db.session.get(Resource, candidate) is not None)
            )
            db.session.add(resource)

        resource.title = title
        resource.content_type = content_type
        resource.category_id = category_id
        if feature_image_file_id:
            resource.feature_image_file_id = feature_image_file_id
        for field, value in content.items():
            setattr(resource, field, value)

        db.session.commit()
        logger.info(f"Saved resource {resource.id} ({content_type})")
        return resource

    def delete_resource(self, resource_id: str):
        self.get_resource(resource_id).delete()
        logger.info(f"Deleted resource {resource_id}")
