"""Notice 도메인의 SQLAlchemy 모델 정의입니다."""

from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, ForeignKey, Index, JSON, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base

DISTRIBUTION_CHANNELS = ("Email", "Intranet", "SMS", "Bulletin")


class Notice(Base):
    __tablename__ = "notice"

    notice_id = Column(Integer, primary_key=True, autoincrement=True)
    notice_code = Column(String(50), unique=True, nullable=False)
    title = Column(String(200), nullable=False)
    type = Column(String(30))
    priority = Column(String(10), nullable=False, default="Medium")
    effective_date = Column(DateTime, nullable=False)
    expiration_date = Column(DateTime)

    body = Column(Text, nullable=False)
    attachments = Column(JSON, default=list)
    links = Column(JSON, default=list)

    recipients = Column(JSON, nullable=False, default=list)
    distribution_channels = Column(JSON, nullable=False, default=list)
    delivery_date = Column(DateTime, nullable=False)
    acknowledgment_required = Column(Boolean, default=False)
    publish_to_students = Column(Boolean, default=False)
    publish_to_examiners = Column(Boolean, default=False)

    regulatory_references = Column(JSON, default=list)
    approval_status = Column(String(20), nullable=False, default="Pending")  # Pending/Approved/Rejected

    author = Column(String(100), nullable=False)
    visibility = Column(String(20), nullable=False, default="Internal")  # Public/Internal/Restricted
    confidentiality_level = Column(String(20), nullable=False, default="Public")
    retention_period = Column(Integer)
    version = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime, server_default=func.now())
    last_updated = Column(DateTime, server_default=func.now(), onupdate=func.now())

    acknowledgments = relationship(
        "NoticeAcknowledgment",
        back_populates="notice",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    __table_args__ = (
        Index("idx_notice_effective", "effective_date"),
    )


class NoticeAcknowledgment(Base):
    __tablename__ = "notice_acknowledgment"

    ack_id = Column(Integer, primary_key=True, autoincrement=True)
    notice_id = Column(Integer, ForeignKey("notice.notice_id", ondelete="CASCADE"), nullable=False)
    user_ref = Column(String(100), nullable=False)
    acknowledged_at = Column(DateTime, server_default=func.now(), nullable=False)

    notice = relationship("Notice", back_populates="acknowledgments")

    __table_args__ = (
        UniqueConstraint("notice_id", "user_ref", name="uq_notice_ack_notice_user"),
    )
