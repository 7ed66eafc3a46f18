"""날짜/시간 정규화 등 공용 유틸리티 헬퍼입니다."""

from datetime import datetime, timezone


def utcnow() -> datetime:
    # DB에는 UTC 기준 naive datetime으로 저장한다.
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def dedupe_texts(values) -> list[str]:
    seen: list[str] = []
    for raw in values or []:
        text = str(raw or "").strip()
        if text and text not in seen:
            seen.append(text)
    return seen
