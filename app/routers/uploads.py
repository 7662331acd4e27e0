# app/routers/uploads.py
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status

from app.core.config import get_settings
from app.core.file_rules import (
    MAX_UPLOAD_BYTES,
    FileValidationError,
    content_type_for,
    validate_upload,
)
from app.core.storage_utils import (
    UploadGateway,
    UploadRejectedError,
    UploadTransportError,
    get_upload_gateway,
    resource_kind_for,
)

router = APIRouter(prefix="/upload", tags=["Uploads"])

settings = get_settings()


@router.post("", summary="Upload a file to the media host")
def upload_file(
    file: UploadFile = File(...),
    folder: str = Form(default=settings.UPLOAD_FOLDER),
    upload_type: str = Form(default="general", alias="uploadType"),
    gateway: UploadGateway = Depends(get_upload_gateway),
) -> dict:
    """
    Upload a document / notice attachment / general media file.

    - uploadType: "document" | "notice" | "general" (selects allowed types)
    - max 10MB for every type
    - the response carries the attachment reference to put on the record
      (url, size, originalFilename) and the derived fileType label

    Errors:
      - 400: disallowed type, oversized file or unknown uploadType
      - 502: the media host rejected the upload
      - 503: the media host could not be reached
    """
    # One byte past the cap is enough to reject an oversized file
    file_bytes = file.file.read(MAX_UPLOAD_BYTES + 1)
    content_type = content_type_for(file.filename, file.content_type)

    try:
        file_type = validate_upload(upload_type, content_type, len(file_bytes))
    except FileValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )

    try:
        result = gateway.upload(
            file_bytes,
            folder=folder or settings.UPLOAD_FOLDER,
            content_type=content_type,
            original_name=file.filename,
        )
    except UploadTransportError:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Upload failed: media host unreachable, please retry",
        )
    except UploadRejectedError:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Upload failed",
        )

    return {
        "success": True,
        "url": result.url,
        "publicId": result.storage_id,
        "format": result.format,
        "size": result.byte_size,
        "originalFilename": file.filename,
        "type": content_type,
        "resourceType": resource_kind_for(content_type),
        "fileType": file_type,
    }
