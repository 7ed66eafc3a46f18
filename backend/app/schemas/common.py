"""여러 도메인이 공유하는 Pydantic 베이스 모델과 첨부파일 타입입니다."""

from datetime import datetime
from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.utils.helpers import to_naive_utc


class ApiModel(BaseModel):
    # 내부는 snake_case, JSON은 camelCase로 주고받는다.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class SimpleAttachment(ApiModel):
    kind: Literal["simple"] = "simple"
    url: str


class RichAttachment(ApiModel):
    kind: Literal["rich"] = "rich"
    filename: str
    url: str
    type: Optional[str] = None
    size: Optional[int] = Field(None, ge=0)


Attachment = Annotated[Union[SimpleAttachment, RichAttachment], Field(discriminator="kind")]


def coerce_attachments(value: Any) -> Any:
    """문자열 URL이나 kind 없는 객체를 태그가 붙은 첨부파일 형태로 맞춘다."""
    if value is None:
        return []
    if not isinstance(value, list):
        return value
    items = []
    for item in value:
        if isinstance(item, str):
            items.append({"kind": "simple", "url": item})
        elif isinstance(item, dict) and "kind" not in item:
            kind = "rich" if item.get("filename") else "simple"
            items.append({**item, "kind": kind})
        else:
            items.append(item)
    return items


def normalize_datetime(value: Optional[datetime]) -> Optional[datetime]:
    return to_naive_utc(value)


class MessageOut(BaseModel):
    message: str


class BulkDeleteRequest(ApiModel):
    ids: List[int] = Field(default_factory=list)
