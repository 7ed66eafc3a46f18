"""SQLAlchemy 모델 패키지 초기화 모듈입니다."""

from app.models.user import User
from app.models.examiner import Examiner
from app.models.student import Student
from app.models.booking import Booking, Presentation
from app.models.notification import Notification, NotificationAudience
from app.models.notice import Notice, NoticeAcknowledgment

__all__ = [
    "User",
    "Examiner",
    "Student",
    "Booking", "Presentation",
    "Notification", "NotificationAudience",
    "Notice", "NoticeAcknowledgment",
]
