"""Notification 도메인의 SQLAlchemy 모델 정의입니다."""

from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, ForeignKey, Index, JSON, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base
from app.utils.helpers import utcnow

NOTIFICATION_TYPES = ("Academic", "Administrative", "Event")
PRIORITIES = ("High", "Medium", "Low")
STATUSES = ("Draft", "Published", "Archived")
AUDIENCES = ("students", "examiners", "common")


class Notification(Base):
    __tablename__ = "notification"

    notification_id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(100), nullable=False)
    body = Column(Text, nullable=False)
    type = Column(String(20), nullable=False)  # Academic/Administrative/Event
    priority = Column(String(10), nullable=False, default="Medium")
    status = Column(String(10), nullable=False, default="Draft")  # Draft/Published/Archived
    author = Column(String(100), default="Admin")
    effective_date = Column(DateTime, nullable=False, default=utcnow)
    expiration_date = Column(DateTime, nullable=False)
    tags = Column(JSON, default=list)
    attachments = Column(JSON, default=list)
    highlight_notice = Column(Boolean, default=False)
    notify_via_email = Column(Boolean, default=False)
    view_count = Column(Integer, nullable=False, default=0)
    created_by = Column(Integer, ForeignKey("users.user_id"), nullable=True)
    last_modified_by = Column(Integer, ForeignKey("users.user_id"), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    audiences = relationship(
        "NotificationAudience",
        back_populates="notification",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    __table_args__ = (
        Index("idx_notification_window", "effective_date", "expiration_date"),
        Index("idx_notification_status", "status"),
        Index("idx_notification_type_priority", "type", "priority"),
    )

    @property
    def target_audience(self) -> list[str]:
        values = {row.audience for row in self.audiences}
        return [aud for aud in AUDIENCES if aud in values]

    def is_active(self, now: datetime) -> bool:
        return (
            self.status == "Published"
            and self.effective_date <= now
            and self.expiration_date > now
        )


class NotificationAudience(Base):
    __tablename__ = "notification_audience"

    id = Column(Integer, primary_key=True, autoincrement=True)
    notification_id = Column(
        Integer, ForeignKey("notification.notification_id", ondelete="CASCADE"), nullable=False
    )
    audience = Column(String(20), nullable=False)  # students/examiners/common

    notification = relationship("Notification", back_populates="audiences")

    __table_args__ = (
        UniqueConstraint("notification_id", "audience", name="uq_notification_audience"),
        Index("idx_notification_audience", "audience"),
    )
