"""Notice 요청/응답 계약을 위한 Pydantic 스키마입니다."""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import Field, field_validator

from app.schemas.common import ApiModel, Attachment, coerce_attachments, normalize_datetime

NoticePriority = Literal["High", "Medium", "Low"]
DistributionChannel = Literal["Email", "Intranet", "SMS", "Bulletin"]
ApprovalStatus = Literal["Pending", "Approved", "Rejected"]
Visibility = Literal["Public", "Internal", "Restricted"]
ConfidentialityLevel = Literal["Confidential", "Public"]


class _NoticeFields(ApiModel):
    @field_validator("attachments", mode="before", check_fields=False)
    @classmethod
    def _coerce_attachments(cls, value):
        return coerce_attachments(value)

    @field_validator("effective_date", "expiration_date", "delivery_date", mode="after", check_fields=False)
    @classmethod
    def _to_utc(cls, value):
        return normalize_datetime(value)


class NoticeCreate(_NoticeFields):
    notice_code: str = Field(..., min_length=1, max_length=50, alias="noticeId")
    title: str = Field(..., min_length=1, max_length=200)
    type: Optional[str] = None
    priority: NoticePriority = "Medium"
    effective_date: datetime
    expiration_date: Optional[datetime] = None
    body: str = Field(..., min_length=1)
    attachments: List[Attachment] = Field(default_factory=list)
    links: List[str] = Field(default_factory=list)
    recipients: List[str] = Field(..., min_length=1)
    distribution_channels: List[DistributionChannel] = Field(..., min_length=1)
    delivery_date: datetime
    acknowledgment_required: bool = False
    publish_to_students: bool = False
    publish_to_examiners: bool = False
    regulatory_references: List[str] = Field(default_factory=list)
    author: str = Field(..., min_length=1)
    visibility: Visibility = "Internal"
    confidentiality_level: ConfidentialityLevel = "Public"
    retention_period: Optional[int] = Field(None, ge=0)


class NoticeUpdate(_NoticeFields):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    type: Optional[str] = None
    priority: Optional[NoticePriority] = None
    effective_date: Optional[datetime] = None
    expiration_date: Optional[datetime] = None
    body: Optional[str] = Field(None, min_length=1)
    attachments: Optional[List[Attachment]] = None
    links: Optional[List[str]] = None
    recipients: Optional[List[str]] = Field(None, min_length=1)
    distribution_channels: Optional[List[DistributionChannel]] = Field(None, min_length=1)
    delivery_date: Optional[datetime] = None
    acknowledgment_required: Optional[bool] = None
    publish_to_students: Optional[bool] = None
    publish_to_examiners: Optional[bool] = None
    regulatory_references: Optional[List[str]] = None
    approval_status: Optional[ApprovalStatus] = None
    author: Optional[str] = None
    visibility: Optional[Visibility] = None
    confidentiality_level: Optional[ConfidentialityLevel] = None
    retention_period: Optional[int] = Field(None, ge=0)


class NoticeAcknowledgmentOut(ApiModel):
    user_ref: str = Field(..., alias="userId")
    acknowledged_at: Optional[datetime] = None


class NoticeOut(ApiModel):
    notice_id: int = Field(..., alias="id")
    notice_code: str = Field(..., alias="noticeId")
    title: str
    type: Optional[str] = None
    priority: str
    effective_date: datetime
    expiration_date: Optional[datetime] = None
    body: str
    attachments: List[Attachment] = []
    links: List[str] = []
    recipients: List[str] = []
    distribution_channels: List[str] = []
    delivery_date: datetime
    acknowledgment_required: bool = False
    publish_to_students: bool = False
    publish_to_examiners: bool = False
    regulatory_references: List[str] = []
    approval_status: str
    author: str
    visibility: str
    confidentiality_level: str
    retention_period: Optional[int] = None
    version: int
    created_at: Optional[datetime] = None
    last_updated: Optional[datetime] = None
    acknowledgments: List[NoticeAcknowledgmentOut] = []

    @field_validator("attachments", "links", "recipients", "distribution_channels", "regulatory_references", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return value or []


class NoticeAcknowledgeRequest(ApiModel):
    user_ref: str = Field(..., min_length=1, alias="userId")


class NoticeMutationOut(ApiModel):
    message: str
    notice: NoticeOut
