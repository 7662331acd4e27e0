# app/routers/documents.py
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from app.core.storage_utils import UploadGateway, get_upload_gateway
from app.database import get_session
from app.models.document import Document
from app.repositories.resource_repo import ResourceRepository
from app.routers.common import (
    get_actor,
    record_activity,
    require_object_id,
    store_failure,
    unwrap_update,
)
from app.schemas.common import StatusResponse
from app.schemas.document import (
    DocumentCreate,
    DocumentEnvelope,
    DocumentListEnvelope,
    DocumentRead,
    DocumentUpdate,
)
from app.services.document_service import DocumentService
from app.services.resource_service import StoreError

router = APIRouter(prefix="/documents", tags=["Documents"])

repo = ResourceRepository(Document)
service = DocumentService(repo)


@router.get(
    "",
    response_model=DocumentListEnvelope,
    response_model_exclude_none=True,
)
def list_documents(session: Session = Depends(get_session)):
    """
    List every document.
    """
    try:
        documents = service.list(session)
    except SQLAlchemyError:
        raise store_failure("fetch", "documents")
    return DocumentListEnvelope(
        documents=[DocumentRead.model_validate(d) for d in documents]
    )


@router.post(
    "",
    response_model=DocumentEnvelope,
    response_model_exclude_none=True,
)
def create_document(
    payload: DocumentCreate,
    session: Session = Depends(get_session),
    actor: str = Depends(get_actor),
):
    """
    Create a document record for an already uploaded file.

    - uploadDate is stamped by the server
    - 400 on missing fields, unknown fileType / category or a partial
      attachment (fileUrl without fileSize + originalName)
    """
    try:
        document = service.create(session, payload.model_dump())
    except (StoreError, SQLAlchemyError):
        raise store_failure("create", "document")

    body = DocumentEnvelope(document=DocumentRead.model_validate(document))
    record_activity(session, "created", "Documents", f"Created document: {document.name}", actor)
    return body


@router.put(
    "",
    response_model=DocumentEnvelope,
    response_model_exclude_none=True,
)
def update_document(
    payload: DocumentUpdate,
    session: Session = Depends(get_session),
    actor: str = Depends(get_actor),
    gateway: UploadGateway = Depends(get_upload_gateway),
):
    """
    Replace a document's fields; a replaced file is removed from storage.
    """
    require_object_id(payload.id, "Document")
    fields = payload.model_dump(exclude={"id", "version"})

    try:
        outcome = service.update(session, payload.id, fields, payload.version, gateway)
    except (StoreError, SQLAlchemyError):
        raise store_failure("update", "document")

    document = unwrap_update(outcome, "Document")
    body = DocumentEnvelope(document=DocumentRead.model_validate(document))
    record_activity(session, "updated", "Documents", f"Updated document: {document.name}", actor)
    return body


@router.delete("", response_model=StatusResponse)
def delete_document(
    id: str | None = Query(default=None),
    session: Session = Depends(get_session),
    actor: str = Depends(get_actor),
    gateway: UploadGateway = Depends(get_upload_gateway),
):
    """
    Delete a document by `?id=`; the hosted file is removed best-effort.
    """
    document_id = require_object_id(id, "Document")

    try:
        deleted = service.delete(session, document_id, gateway)
    except SQLAlchemyError:
        raise store_failure("delete", "document")

    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Document not found",
        )

    record_activity(session, "deleted", "Documents", f"Deleted document: {document_id}", actor)
    return StatusResponse()
