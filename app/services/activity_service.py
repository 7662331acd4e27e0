# app/services/activity_service.py
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, col, select

from app.core.config import get_settings
from app.models.activity import ActivityLog

logger = logging.getLogger(__name__)
settings = get_settings()


class ActivityService:
    """
    Capped, append-only audit trail of admin actions.

    record() is fire-and-forget: a failure is logged and rolled back, it never
    propagates to the mutation that triggered it.
    """

    def __init__(self, limit: int | None = None):
        self.limit = limit or settings.ACTIVITY_LOG_LIMIT

    def list(self, session: Session) -> list[ActivityLog]:
        """
        Most recent first, at most `limit` entries.
        """
        stmt = (
            select(ActivityLog)
            .order_by(col(ActivityLog.timestamp).desc(), col(ActivityLog.id).desc())
            .limit(self.limit)
        )
        return list(session.exec(stmt).all())

    def _prune(self, session: Session) -> None:
        stale = (
            select(ActivityLog)
            .order_by(col(ActivityLog.timestamp).desc(), col(ActivityLog.id).desc())
            .offset(self.limit)
        )
        for entry in session.exec(stale).all():
            session.delete(entry)

    def record(
        self,
        session: Session,
        action: str,
        module: str,
        details: str,
        user: str,
    ) -> ActivityLog | None:
        entry = ActivityLog(action=action, module=module, details=details, user=user)
        try:
            session.add(entry)
            session.flush()
            self._prune(session)
            session.commit()
            session.refresh(entry)
        except SQLAlchemyError as e:
            session.rollback()
            logger.warning("Activity log write failed (%s %s): %s", action, module, e)
            return None
        return entry
