"""Student 도메인의 SQLAlchemy 모델 정의입니다."""

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from app.database import Base


class Student(Base):
    __tablename__ = "student"

    student_pk = Column(Integer, primary_key=True, autoincrement=True)
    student_id = Column(String(30), unique=True, nullable=False)
    name = Column(String(100), nullable=False)
    age = Column(Integer, nullable=False)
    address = Column(String(255), nullable=False)
    email = Column(String(100), unique=True, nullable=False)
    contact_no = Column(String(30), nullable=False)
    faculty = Column(String(100), nullable=False)
    specialization = Column(String(100), nullable=False)
    year = Column(Integer, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())
