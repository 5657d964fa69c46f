"""
Site banner selection with per-session dismissals.
"""
import logging
from datetime import datetime
from typing import Callable, List, Optional, Set

from chefdhundo.client.api import ApiError, ChefDhundoClient
from chefdhundo.core.announcements import select_current_announcement

logger = logging.getLogger(__name__)


class AnnouncementFeed:
    def __init__(self, client: ChefDhundoClient, now: Callable[[], datetime] = datetime.utcnow):
        self.client = client
        self.now = now
        self.announcements: List[dict] = []
        self.dismissed: Set[int] = set()
        self.error: Optional[str] = None

    def refresh(self) -> List[dict]:
        try:
            self.announcements = self.client.list_announcements(active=True)
            self.error = None
        except ApiError as e:
            logger.warning(f"Failed to load announcements: {e.detail}")
            self.error = e.detail
        return self.announcements

    def current(self) -> Optional[dict]:
        return select_current_announcement(self.announcements, self.now(), self.dismissed)

    def dismiss(self, announcement_id: int) -> None:
        for announcement in self.announcements:
            if announcement.get("id") == announcement_id and not announcement.get("dismissible", True):
                return
        self.dismissed.add(announcement_id)
