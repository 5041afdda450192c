"""
File uploads stored inline as base64 text
"""

import base64
import binascii
import logging

from realty_crm.exceptions import DataValidationError, RecordNotFoundError
from realty_crm.models import db
from realty_crm.models.stored_file import StoredFile
from realty_crm.utils import generate_unique_id

logger = logging.getLogger(__name__)

FILE_ID_PREFIX = 'FILE'


class FileService:
    """Store and fetch uploaded files"""

    def save_upload(self, upload, uploaded_by: str = None) -> StoredFile:
        """Store a werkzeug FileStorage from a multipart form"""
        if upload is None or not upload.filename:
            raise DataValidationError("No file uploaded.", 'file')
        data = base64.b64encode(upload.read()).decode('ascii')
        return self._store(data, upload.filename, upload.mimetype, uploaded_by)

    def save_base64(self, data: str, file_name: str = None, content_type: str = None,
                    uploaded_by: str = None) -> StoredFile:
        """Store base64 content, accepting data URLs as sent by browsers"""
        if not data:
            raise DataValidationError("File data is required.", 'data')

        if data.startswith('data:') and ',' in data:
            header, data = data.split(',', 1)
            content_type = content_type or header[5:].split(';')[0]

        try:
            base64.b64decode(data, validate=True)
        except (binascii.Error, ValueError):
            raise DataValidationError("File data is not valid base64.", 'data')

        return self._store(data, file_name, content_type, uploaded_by)

    def get_file(self, file_id: str) -> StoredFile:
        stored = db.session.get(StoredFile, file_id)
        if stored is None:
            raise RecordNotFoundError('File', file_id)
        return stored

    def get_bytes(self, file_id: str) -> bytes:
        return base64.b64decode(self.get_file(file_id).data)

    def _store(self, data: str, file_name, content_type, uploaded_by) -> StoredFile:
        stored = StoredFile(
            id=generate_unique_id(FILE_ID_PREFIX, lambda candidate: db.session.get(StoredFile, candidate) is not None),
            file_name=file_name,
            content_type=content_type or 'application/octet-stream',
            data=data,
            uploaded_by=uploaded_by,
        )
        stored.save()
        logger.info(f"Stored file {stored.id} ({file_name})")
        return stored
