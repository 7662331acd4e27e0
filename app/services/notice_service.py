# app/services/notice_service.py
from sqlmodel import Session

from app.models.notice import Notice
from app.services.resource_service import ResourceService


class NoticeService(ResourceService[Notice]):
    kind = "Notice"
    attachment_fields = ("file_url",)

    def list_popups(self, session: Session) -> list[Notice]:
        """
        Active notices flagged to be shown as an interstitial, newest first.
        """
        notices = [n for n in self.list(session) if n.is_active and n.show_as_popup]
        return sorted(notices, key=lambda n: n.created_at, reverse=True)
