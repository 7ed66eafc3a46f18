"""서비스 레이어 패키지 초기화 모듈입니다."""

from app.services import (
    auth_service,
    user_service,
    examiner_service,
    student_service,
    booking_service,
    notification_service,
    notice_service,
    email_service,
    realtime_service,
)
