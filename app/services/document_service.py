# app/services/document_service.py
from typing import Any

from app.models.base import utcnow
from app.models.document import Document
from app.services.resource_service import ResourceService


class DocumentService(ResourceService[Document]):
    """
    Business logic for downloadable documents.

    - upload_date is stamped by the server on create and never changes
    - replacing or deleting a document removes the old hosted file
    """

    kind = "Document"
    attachment_fields = ("file_url",)

    def prepare_create(self, fields: dict[str, Any]) -> dict[str, Any]:
        fields["upload_date"] = utcnow().isoformat()
        return fields

    def prepare_update(self, entity: Document, fields: dict[str, Any]) -> dict[str, Any]:
        fields.pop("upload_date", None)
        return fields
