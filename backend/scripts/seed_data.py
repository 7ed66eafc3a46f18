"""Seed the database with demo data."""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from datetime import timedelta
from app.database import SessionLocal, engine, Base
import app.models  # noqa: F401

from app.models.user import User
from app.models.examiner import Examiner
from app.models.student import Student
from app.models.booking import Booking, Presentation
from app.models.notification import Notification, NotificationAudience
from app.services.auth_service import hash_password
from app.utils.helpers import utcnow


def seed():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        if db.query(User).count() > 0:
            print("Database already seeded. Skipping.")
            return

        # Users (비밀번호는 모두 password123)
        password_hash = hash_password("password123")
        users = [
            User(email="admin@autoshed.local", role="admin", first_name="Admin", password_hash=password_hash),
            User(email="nimal@autoshed.local", role="examiner", first_name="Nimal", password_hash=password_hash),
            User(email="kamal@autoshed.local", role="examiner", first_name="Kamal", password_hash=password_hash),
            User(email="sahan@autoshed.local", role="student", first_name="Sahan", password_hash=password_hash),
        ]
        db.add_all(users)
        db.flush()

        # Examiner profiles (계정과 이메일로 연결)
        examiners = [
            Examiner(code="EX1", email="nimal@autoshed.local", fname="Nimal", lname="Perera",
                     position="Senior Lecturer", phone="0771234567", department="Computing",
                     courses=["Software Engineering"], modules=["SE3010", "SE4010"], salary=150000),
            Examiner(code="EX2", email="kamal@autoshed.local", fname="Kamal", lname="Silva",
                     position="Lecturer", phone="0777654321", department="Computing",
                     courses=["Information Technology"], modules=["IT2020"], salary=120000),
        ]
        db.add_all(examiners)

        students = [
            Student(student_id="IT21000001", name="Sahan Fernando", age=22, address="Colombo",
                    email="sahan@autoshed.local", contact_no="0711111111", faculty="Computing",
                    specialization="Software Engineering", year=3),
            Student(student_id="IT21000002", name="Dilini Jayasuriya", age=23, address="Kandy",
                    email="dilini@autoshed.local", contact_no="0722222222", faculty="Computing",
                    specialization="Data Science", year=4),
        ]
        db.add_all(students)

        # Slots
        db.add_all([
            Booking(examiner_id="EX1", date="2026-11-02", time="09:00", is_booked=True),
            Booking(examiner_id="EX2", date="2026-11-02", time="10:00", is_booked=True),
            Presentation(examiner_id="EX1", date="2026-11-03", time="13:30"),
        ])

        # Notifications
        now = utcnow()
        welcome = Notification(
            title="Welcome to AutoShed",
            body="Presentation slots for the final year are now open for booking.",
            type="Academic",
            priority="High",
            status="Published",
            effective_date=now - timedelta(days=1),
            expiration_date=now + timedelta(days=30),
            tags=["presentations"],
            created_by=users[0].user_id,
        )
        welcome.audiences.append(NotificationAudience(audience="common"))
        draft = Notification(
            title="Examiner briefing",
            body="Examiner briefing session details will be shared soon.",
            type="Administrative",
            status="Draft",
            expiration_date=now + timedelta(days=14),
            created_by=users[0].user_id,
        )
        draft.audiences.append(NotificationAudience(audience="examiners"))
        db.add_all([welcome, draft])

        db.commit()
        print("Seed data created successfully.")
        print("  Users: admin@autoshed.local, nimal@autoshed.local, kamal@autoshed.local, sahan@autoshed.local")
        print("  Password: password123")
    finally:
        db.close()


if __name__ == "__main__":
    seed()
