"""Student Service 도메인 서비스 레이어입니다."""

from typing import List

from sqlalchemy.orm import Session

from app.models.student import Student
from app.schemas.student import StudentCreate, StudentUpdate
from app.utils.errors import FieldValidationError, not_found


def list_students(db: Session) -> List[Student]:
    return db.query(Student).order_by(Student.student_pk).all()


def get_student(db: Session, student_pk: int) -> Student:
    student = db.query(Student).filter(Student.student_pk == student_pk).first()
    if not student:
        raise not_found("Student")
    return student


def create_student(db: Session, data: StudentCreate) -> Student:
    errors = {}
    if db.query(Student.student_pk).filter(Student.student_id == data.student_id).first():
        errors["studentId"] = "Student ID already exists"
    if db.query(Student.student_pk).filter(Student.email == data.email).first():
        errors["email"] = "Email already registered"
    if errors:
        raise FieldValidationError(errors)

    student = Student(**data.model_dump())
    db.add(student)
    db.commit()
    db.refresh(student)
    return student


def update_student(db: Session, student_pk: int, data: StudentUpdate) -> Student:
    student = get_student(db, student_pk)
    payload = data.model_dump(exclude_none=True)
    if "email" in payload:
        taken = (
            db.query(Student.student_pk)
            .filter(Student.email == payload["email"], Student.student_pk != student_pk)
            .first()
        )
        if taken:
            raise FieldValidationError({"email": "Email already registered"})
    for key, value in payload.items():
        setattr(student, key, value)
    db.commit()
    db.refresh(student)
    return student


def delete_student(db: Session, student_pk: int) -> None:
    student = get_student(db, student_pk)
    db.delete(student)
    db.commit()
