import os

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# FORCE model registration
import gradverify.models  # noqa

from gradverify.core.security import create_access_token
from gradverify.db.base import Base
from gradverify.db.session import get_db
from gradverify.main import app
from gradverify.models.enums import UserRole
from gradverify.models.student_profile import StudentProfile
from gradverify.models.user import User
from gradverify.policies.rbac import Principal

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+pysqlite:///:memory:")


def _make_engine():
    if TEST_DATABASE_URL.startswith("sqlite"):
        return create_engine(
            TEST_DATABASE_URL,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(TEST_DATABASE_URL)


@pytest.fixture(scope="function")
def db():
    engine = _make_engine()
    Base.metadata.create_all(engine)
    SessionLocal = sessionmaker(bind=engine, autoflush=False)

    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(engine)
        engine.dispose()


@pytest.fixture(scope="function")
def client(db):
    def _override_get_db():
        yield db

    app.dependency_overrides[get_db] = _override_get_db
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.clear()


# ─────────────────────────────────────────────────────────────
# Builders
# ─────────────────────────────────────────────────────────────

def make_user(db, *, email, role=UserRole.STUDENT, name="Test User", department=None) -> User:
    # password hashing is not under test here
    u = User(
        email=email,
        password_hash="x",
        role=UserRole(role).value,
        name=name,
        department=department,
    )
    db.add(u)
    db.commit()
    db.refresh(u)
    return u


def make_profile(
    db,
    user,
    *,
    student_number="2021-00001",
    program="BS Computer Science",
    department="College of Computing",
) -> StudentProfile:
    p = StudentProfile(
        user_id=user.id,
        student_number=student_number,
        program=program,
        department=department,
    )
    db.add(p)
    db.commit()
    db.refresh(p)
    return p


def principal_for(user) -> Principal:
    return Principal(
        user_id=user.id,
        role=UserRole(user.role),
        email=user.email,
        display_name=user.name,
    )


def auth_headers(user) -> dict:
    token = create_access_token(
        user.id,
        role=user.role,
        email=user.email,
        display_name=user.name,
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def student(db):
    return make_user(db, email="student@example.edu", name="Maria Santos")


@pytest.fixture
def faculty(db):
    return make_user(db, email="faculty@example.edu", role=UserRole.FACULTY, name="Dr. Reyes")
