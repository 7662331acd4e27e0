# app/repositories/resource_repo.py
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from sqlmodel import Session, SQLModel, select

ModelT = TypeVar("ModelT", bound=SQLModel)


@dataclass
class InsertResult:
    inserted_id: str | None


@dataclass
class UpdateResult:
    document: Any | None
    modified_count: int


@dataclass
class DeleteResult:
    deleted_count: int


class ResourceRepository(Generic[ModelT]):
    """
    Data access layer for one resource table.

    - Pure DB operations (CRUD), no FastAPI, no business logic.
    - Writes answer with provider-style results (inserted id, modified /
      deleted counts) so callers can verify them.
    """

    def __init__(self, model: type[ModelT]):
        self.model = model

    def get_by_id(self, session: Session, entity_id: str) -> ModelT | None:
        return session.get(self.model, entity_id)

    def list(self, session: Session) -> list[ModelT]:
        stmt = select(self.model).order_by(self.model.created_at, self.model.id)
        return list(session.exec(stmt).all())

    def insert(self, session: Session, entity: ModelT) -> InsertResult:
        session.add(entity)
        session.commit()
        session.refresh(entity)
        return InsertResult(inserted_id=entity.id)

    def update(self, session: Session, entity: ModelT) -> UpdateResult:
        session.add(entity)
        session.commit()
        session.refresh(entity)
        return UpdateResult(document=entity, modified_count=1)

    def delete_by_id(self, session: Session, entity_id: str) -> DeleteResult:
        entity = session.get(self.model, entity_id)
        if entity is None:
            return DeleteResult(deleted_count=0)
        session.delete(entity)
        session.commit()
        return DeleteResult(deleted_count=1)
