import pytest
from fastapi.encoders import jsonable_encoder
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from app.config import settings
from app.database import Base, get_db
from app.main import app
from app.models.examiner import Examiner
from app.models.student import Student
from app.models.user import User
from app.services.auth_service import hash_password
from app.services.email_service import get_email_service
from app.services.realtime_service import get_event_sink

TEST_DB_URL = "sqlite:///./test_autoshed.db"
TEST_PASSWORD = "secret123"

# 테스트에서는 해시 비용을 낮춘다.
settings.BCRYPT_ROUNDS = 4

engine = create_engine(TEST_DB_URL, connect_args={"check_same_thread": False})
TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


class RecordingEventSink:
    def __init__(self):
        self.events = []

    def publish(self, event, payload):
        self.events.append((event, jsonable_encoder(payload, by_alias=True)))

    def names(self):
        return [name for name, _ in self.events]


class FakeEmailService:
    def __init__(self, result: bool = True):
        self.result = result
        self.sent = []

    async def send_bulk(self, recipients, subject, html_content):
        self.sent.append({"recipients": list(recipients), "subject": subject, "html": html_content})
        return self.result


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def events():
    sink = RecordingEventSink()
    app.dependency_overrides[get_event_sink] = lambda: sink
    yield sink
    app.dependency_overrides.pop(get_event_sink, None)


@pytest.fixture
def mailer():
    service = FakeEmailService()
    app.dependency_overrides[get_email_service] = lambda: service
    yield service
    app.dependency_overrides.pop(get_email_service, None)


@pytest.fixture
def seed_users(db):
    users = {
        "admin": User(email="admin@autoshed.test", role="admin", first_name="Admin"),
        "examiner": User(email="ex1@autoshed.test", role="examiner", first_name="Nimal"),
        "examiner2": User(email="ex2@autoshed.test", role="examiner", first_name="Kamal"),
        "student": User(email="student@autoshed.test", role="student", first_name="Sahan"),
    }
    password_hash = hash_password(TEST_PASSWORD)
    for u in users.values():
        u.password_hash = password_hash
        db.add(u)
    db.commit()
    for u in users.values():
        db.refresh(u)
    return users


@pytest.fixture
def seed_examiners(db):
    examiners = [
        Examiner(
            code="EX1",
            email="ex1@autoshed.test",
            fname="Nimal",
            lname="Perera",
            position="Senior Lecturer",
            phone="0771234567",
            department="Computing",
            courses=["SE"],
            modules=["SE3010"],
            salary=150000,
        ),
        Examiner(
            code="EX2",
            email="ex2@autoshed.test",
            fname="Kamal",
            lname="Silva",
            position="Lecturer",
            phone="0777654321",
            department="Computing",
            courses=["IT"],
            modules=["IT2020"],
            salary=120000,
        ),
    ]
    for e in examiners:
        db.add(e)
    db.commit()
    return examiners


@pytest.fixture
def seed_students(db):
    students = [
        Student(
            student_id="IT21000001",
            name="Sahan Fernando",
            age=22,
            address="Colombo",
            email="sahan@autoshed.test",
            contact_no="0711111111",
            faculty="Computing",
            specialization="SE",
            year=3,
        ),
        Student(
            student_id="IT21000002",
            name="Dilini Jayasuriya",
            age=23,
            address="Kandy",
            email="dilini@autoshed.test",
            contact_no="0722222222",
            faculty="Computing",
            specialization="DS",
            year=4,
        ),
    ]
    for s in students:
        db.add(s)
    db.commit()
    return students


def get_token(client, email: str, password: str = TEST_PASSWORD) -> str:
    resp = client.post("/api/users/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.text
    return resp.json()["token"]


def auth_headers(client, email: str) -> dict:
    return {"Authorization": f"Bearer {get_token(client, email)}"}
