"""Examiner 도메인의 SQLAlchemy 모델 정의입니다."""

from sqlalchemy import Column, Integer, String, Float, JSON
from app.database import Base

DEFAULT_PROFILE_PHOTO = (
    "https://t3.ftcdn.net/jpg/04/35/70/87/360_F_435708711_CnUzPzFgXeZCtYsFtCnKzjyqCtFgCqFg.jpg"
)


class Examiner(Base):
    __tablename__ = "examiner"

    examiner_id = Column(Integer, primary_key=True, autoincrement=True)
    code = Column(String(30), unique=True, nullable=False)  # 예: EX1
    email = Column(String(100), unique=True, nullable=False)
    fname = Column(String(50), nullable=False)
    lname = Column(String(50), nullable=False)
    position = Column(String(100), nullable=False)
    phone = Column(String(30), nullable=False)
    department = Column(String(100), nullable=False)
    courses = Column(JSON, nullable=False, default=list)
    modules = Column(JSON, nullable=False, default=list)
    availability = Column(String(20), nullable=False, default="true")
    salary = Column(Float, nullable=False)
    profile_photos = Column(JSON, nullable=False, default=lambda: [DEFAULT_PROFILE_PHOTO])
