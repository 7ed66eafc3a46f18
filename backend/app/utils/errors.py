"""API 공통 오류 타입과 응답 envelope 변환 헬퍼입니다."""

from typing import Dict, Iterable

from fastapi import HTTPException, status

VALIDATION_FAILED = "Validation failed"
_LOCATION_PREFIXES = {"body", "query", "path", "header"}


class FieldValidationError(HTTPException):
    """필드 단위 메시지(field -> message)를 함께 전달하는 400 오류."""

    def __init__(self, errors: Dict[str, str], detail: str = VALIDATION_FAILED):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)
        self.errors = errors


def conflict(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=detail)


def not_found(label: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{label} not found")


def field_errors_from_pydantic(errors: Iterable[dict]) -> Dict[str, str]:
    # 필드당 첫 번째 메시지만 남긴다.
    result: Dict[str, str] = {}
    for err in errors:
        loc = [str(part) for part in err.get("loc", ())]
        if loc and loc[0] in _LOCATION_PREFIXES:
            loc = loc[1:]
        field = ".".join(loc) or "request"
        if field not in result:
            result[field] = str(err.get("msg") or "Invalid value")
    return result
