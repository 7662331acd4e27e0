# app/services/resource_service.py
import logging
from dataclasses import dataclass
from typing import Any, Generic, Iterable, TypeVar, Union

from sqlmodel import Session, SQLModel

from app.core.storage_utils import UploadGateway
from app.core.verification import log_verification_result, verify_store_operation
from app.models.base import utcnow
from app.repositories.resource_repo import ResourceRepository

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=SQLModel)


class StoreError(Exception):
    """A database write could not be verified."""


@dataclass(frozen=True)
class Updated:
    entity: Any


@dataclass(frozen=True)
class NotFound:
    entity_id: str


@dataclass(frozen=True)
class Conflict:
    entity_id: str
    current_version: int


UpdateOutcome = Union[Updated, NotFound, Conflict]


class ResourceService(Generic[ModelT]):
    """
    Create / list / update / delete for one resource kind.

    Responsibilities:
      - id, timestamps and version bookkeeping
      - verifying every write via app.core.verification
      - best-effort cleanup of hosted attachments that a write orphaned

    Subclasses name their attachment columns in `attachment_fields` and may
    override `prepare_create` to fill server-owned fields.
    """

    kind: str = "Resource"
    attachment_fields: tuple[str, ...] = ()

    def __init__(self, repo: ResourceRepository[ModelT]):
        self.repo = repo

    # ----- Hooks -----

    def prepare_create(self, fields: dict[str, Any]) -> dict[str, Any]:
        return fields

    def prepare_update(self, entity: ModelT, fields: dict[str, Any]) -> dict[str, Any]:
        return fields

    def attachment_urls(self, entity: ModelT) -> set[str]:
        urls = set()
        for name in self.attachment_fields:
            value = getattr(entity, name, None)
            if value:
                urls.add(value)
        return urls

    # ----- Helpers -----

    def _verify(self, result: Any, operation: str) -> bool:
        verification = verify_store_operation(result, operation)
        log_verification_result(verification, f"{self.kind} {operation}")
        return verification.success

    def _cleanup(self, gateway: UploadGateway | None, urls: Iterable[str]) -> None:
        """
        Remove orphaned hosted files. Failures are logged only: the record
        change is authoritative even if storage keeps an orphan.
        """
        if gateway is None:
            return
        for url in urls:
            if not gateway.delete_public_url(url):
                logger.info("%s: attachment not removed from storage: %s", self.kind, url)

    # ----- Operations -----

    def list(self, session: Session) -> list[ModelT]:
        entities = self.repo.list(session)
        logger.info("Retrieved %d %s record(s) from database", len(entities), self.kind)
        return entities

    def create(self, session: Session, fields: dict[str, Any]) -> ModelT:
        """
        Persist a new record with a fresh id and timestamps.

        Raises:
            StoreError: if the insert could not be verified.
        """
        now = utcnow()
        data = self.prepare_create(dict(fields))
        entity = self.repo.model(**data, created_at=now, updated_at=now, version=1)

        result = self.repo.insert(session, entity)
        if not self._verify(result, "create"):
            raise StoreError(f"Failed to create {self.kind.lower()}")
        return entity

    def update(
        self,
        session: Session,
        entity_id: str,
        fields: dict[str, Any],
        expected_version: int | None = None,
        gateway: UploadGateway | None = None,
    ) -> UpdateOutcome:
        """
        Merge `fields` over an existing record.

        Returns:
            Updated(entity) on success,
            NotFound if no record has this id,
            Conflict if `expected_version` is stale.

        Raises:
            StoreError: if the write could not be verified.
        """
        entity = self.repo.get_by_id(session, entity_id)
        if entity is None:
            return NotFound(entity_id)

        if expected_version is not None and expected_version != entity.version:
            return Conflict(entity_id, entity.version)

        old_urls = self.attachment_urls(entity)
        data = self.prepare_update(entity, dict(fields))
        for key, value in data.items():
            setattr(entity, key, value)
        entity.updated_at = utcnow()
        entity.version = entity.version + 1

        result = self.repo.update(session, entity)
        if not self._verify(result, "update"):
            raise StoreError(f"Failed to update {self.kind.lower()} {entity_id}")

        # Best-effort cleanup of replaced attachments
        self._cleanup(gateway, old_urls - self.attachment_urls(entity))
        return Updated(entity)

    def delete(
        self,
        session: Session,
        entity_id: str,
        gateway: UploadGateway | None = None,
    ) -> bool:
        """
        Delete a record by id and, best-effort, its hosted attachments.

        Returns:
            True iff exactly one record was removed.
        """
        entity = self.repo.get_by_id(session, entity_id)
        urls = self.attachment_urls(entity) if entity is not None else set()

        result = self.repo.delete_by_id(session, entity_id)
        if result.deleted_count == 0:
            logger.info("%s %s not found, nothing deleted", self.kind, entity_id)
            return False
        deleted = self._verify(result, "delete") and result.deleted_count == 1

        if deleted:
            self._cleanup(gateway, urls)
        return deleted
