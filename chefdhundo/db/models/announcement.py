"""
Announcement model - admin-authored site banners.
"""
from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, Index
from sqlalchemy.sql import func
from chefdhundo.db.base import Base

ANNOUNCEMENT_TYPES = ("info", "warning", "promo", "success", "error", "new", "update")
ANNOUNCEMENT_STATUSES = ("active", "scheduled", "expired", "draft")


class Announcement(Base):
    __tablename__ = "announcements"

    id = Column(Integer, primary_key=True, index=True)
    type = Column(String, nullable=False)
    title = Column(String, nullable=False)
    message = Column(Text, nullable=False)  # markdown
    tag = Column(String, nullable=True)
    icon = Column(String, nullable=True)
    link_url = Column(String, nullable=True)
    link_text = Column(String, nullable=True)

    status = Column(String, nullable=False, default="draft", index=True)
    priority = Column(Integer, nullable=False, default=5)  # 1-10, higher wins
    start_date = Column(DateTime(timezone=True), nullable=False, default=datetime.utcnow)
    end_date = Column(DateTime(timezone=True), nullable=True)  # null = no expiry
    dismissible = Column(Boolean, nullable=False, default=True)

    bg_color = Column(String, nullable=True)
    text_color = Column(String, nullable=True)
    themed = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = (
        Index("idx_announcements_status_window", "status", "start_date", "end_date"),
    )

    def __repr__(self):
        return f"<Announcement(id={self.id}, title='{self.title}', status='{self.status}')>"
