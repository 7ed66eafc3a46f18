"""FastAPI 애플리케이션 진입점. 미들웨어, API 라우터, 예외 핸들러를 등록합니다."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.database import Base, engine
import app.models  # noqa: F401 - 모델 import로 metadata 등록
from app.routers import (
    bookings, examiners, notices, notifications, presentations, realtime, students, users,
)
from app.utils.errors import VALIDATION_FAILED, FieldValidationError, field_errors_from_pydantic

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="AutoShed 학사 운영 시스템",
    description="시험관/학생/발표 일정과 공지 알림을 관리하는 백엔드",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register all routers
app.include_router(users.router)
app.include_router(examiners.router)
app.include_router(students.router)
app.include_router(bookings.router)
app.include_router(presentations.router)
app.include_router(notifications.router)
app.include_router(notices.router)
app.include_router(realtime.router)


@app.exception_handler(FieldValidationError)
async def field_validation_handler(request: Request, exc: FieldValidationError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail, "errors": exc.errors})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"detail": VALIDATION_FAILED, "errors": field_errors_from_pydantic(exc.errors())},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("[app] unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": str(exc)})


@app.on_event("startup")
def ensure_schema():
    # 누락된 테이블을 자동 생성합니다.
    Base.metadata.create_all(bind=engine)


@app.get("/api/health")
def health_check():
    return {"status": "ok", "service": "AutoShed 학사 운영 시스템"}
