# app/core/verification.py
"""
Post-condition checks for database and storage provider responses.

Provider responses come in different shapes (write-result objects from the
repositories, dicts from the storage client, lists from bulk removes). The
helpers here turn them into a single VerificationResult that callers may log
or escalate. Nothing here retries or corrects anything.
"""
import logging
from dataclasses import dataclass
from typing import Any, Literal

logger = logging.getLogger(__name__)

StoreOperation = Literal["create", "update", "delete"]
StorageOperation = Literal["upload", "delete"]


@dataclass(frozen=True)
class VerificationResult:
    success: bool
    message: str


def _read(result: Any, *names: str) -> Any:
    """Return the first non-empty attribute or mapping key among `names`."""
    for name in names:
        if isinstance(result, dict):
            value = result.get(name)
        else:
            value = getattr(result, name, None)
        if value:
            return value
    return None


def verify_store_operation(result: Any, operation: StoreOperation) -> VerificationResult:
    """
    Verify a database write result.

    - create: succeeds iff a newly assigned identifier is present
    - update: succeeds iff the updated document or a positive modified count is present
    - delete: succeeds iff a positive deleted count is present
    """
    if result is None:
        return VerificationResult(
            False, f"Database {operation} operation failed: No result returned"
        )

    if operation == "create":
        inserted_id = _read(result, "inserted_id", "insertedId")
        if inserted_id:
            return VerificationResult(
                True,
                f"Database {operation} operation successful: Record created with ID {inserted_id}",
            )
    elif operation == "update":
        document = _read(result, "document", "value")
        modified = _read(result, "modified_count", "modifiedCount") or 0
        if document is not None or modified > 0:
            return VerificationResult(
                True, f"Database {operation} operation successful: Record updated"
            )
    elif operation == "delete":
        deleted = _read(result, "deleted_count", "deletedCount") or 0
        if deleted > 0:
            return VerificationResult(
                True,
                f"Database {operation} operation successful: {deleted} record(s) deleted",
            )

    return VerificationResult(
        False, f"Database {operation} operation failed: Unexpected result format"
    )


def verify_storage_operation(result: Any, operation: StorageOperation) -> VerificationResult:
    """
    Verify a media-host response.

    - upload: succeeds iff both a URL and a storage identifier are present
    - delete: succeeds iff the provider reports at least one removed object
    """
    if result is None:
        return VerificationResult(
            False, f"Storage {operation} operation failed: No result returned"
        )

    if operation == "upload":
        url = _read(result, "url")
        storage_id = _read(result, "storage_id", "storageId", "path")
        if url and storage_id:
            return VerificationResult(
                True,
                f"Storage {operation} operation successful: File uploaded with storage ID {storage_id}",
            )
    elif operation == "delete":
        # storage remove() answers with the list of removed objects
        if isinstance(result, list) and len(result) > 0:
            return VerificationResult(
                True, f"Storage {operation} operation successful: File deleted"
            )
        if isinstance(result, dict) and result.get("result") == "ok":
            return VerificationResult(
                True, f"Storage {operation} operation successful: File deleted"
            )

    return VerificationResult(
        False, f"Storage {operation} operation failed: Unexpected result format"
    )


def log_verification_result(result: VerificationResult, operation: str) -> None:
    if result.success:
        logger.info("%s verification: %s", operation, result.message)
    else:
        logger.error("%s verification: %s", operation, result.message)
