"""User Service 도메인 서비스 레이어입니다. 비즈니스 규칙과 데이터 접근 흐름을 캡슐화합니다."""

from fastapi import HTTPException
from sqlalchemy.orm import Session

from app.models.user import User
from app.schemas.user import UserCreate
from app.services.auth_service import hash_password
from app.utils.errors import FieldValidationError, not_found


def list_users(db: Session, include_inactive: bool = False):
    q = db.query(User)
    if not include_inactive:
        q = q.filter(User.is_active == True)  # noqa: E712
    return q.order_by(User.user_id).all()


def register_user(db: Session, data: UserCreate) -> User:
    email = data.email.strip().lower()
    if db.query(User.user_id).filter(User.email == email).first():
        raise FieldValidationError({"email": "Email already registered"})

    user = User(
        email=email,
        password_hash=hash_password(data.password),
        role=data.role,
        first_name=data.first_name,
        is_active=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def delete_user(db: Session, user_id: int, current_user: User) -> None:
    if user_id == current_user.user_id:
        raise HTTPException(status_code=400, detail="You cannot delete your own account")
    user = db.query(User).filter(User.user_id == user_id, User.is_active == True).first()  # noqa: E712
    if not user:
        raise not_found("User")
    # 작성자 참조를 유지하기 위해 비활성화로 처리한다.
    user.is_active = False
    db.commit()


def restore_user(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.user_id == user_id, User.is_active == False).first()  # noqa: E712
    if not user:
        raise not_found("Inactive user")
    user.is_active = True
    db.commit()
    db.refresh(user)
    return user
