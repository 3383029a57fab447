from sqlalchemy import select
from sqlalchemy.orm import Session

from gradverify.db.session import SessionLocal
from gradverify.models.enums import UserRole
from gradverify.models.student_profile import StudentProfile
from gradverify.models.user import User
from gradverify.services.auth_service import create_user
from gradverify.services.verification_engine import engine_for_session

ACCOUNTS = [
    ("admin@gradverify.edu", "admin123", UserRole.ADMIN, "Registrar Admin", None),
    ("superadmin@gradverify.edu", "superadmin123", UserRole.SUPERADMIN, "Super Admin", None),
    ("faculty@gradverify.edu", "faculty123", UserRole.FACULTY, "Faculty Reviewer", "College of Computing"),
    ("student@gradverify.edu", "student123", UserRole.STUDENT, "Juan Dela Cruz", "College of Computing"),
]


def _get_or_create(db: Session, email, password, role, name, department) -> User:
    u = db.execute(select(User).where(User.email == email)).scalar_one_or_none()
    if u:
        return u
    return create_user(db, email=email, password=password, role=role, name=name, department=department)


def seed():
    db: Session = SessionLocal()

    users = {email: _get_or_create(db, email, pw, role, name, dept) for email, pw, role, name, dept in ACCOUNTS}

    student = users["student@gradverify.edu"]
    profile = db.execute(
        select(StudentProfile).where(StudentProfile.user_id == student.id)
    ).scalar_one_or_none()

    if profile is None:
        profile = StudentProfile(
            user_id=student.id,
            student_number="2021-00123",
            program="BS Computer Science",
            department="College of Computing",
        )
        db.add(profile)
        db.commit()
        db.refresh(profile)

    engine_for_session(db).recompute_for_student(profile.id)

    db.close()

if __name__ == "__main__":
    seed()
