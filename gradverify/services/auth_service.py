# gradverify/services/auth_service.py
from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from gradverify.core.security import verify_password, hash_password
from gradverify.models.enums import UserRole
from gradverify.models.user import User
from gradverify.policies.rbac import Principal

logger = logging.getLogger(__name__)


def _principal(u: User) -> Principal:
    return Principal(
        user_id=u.id,
        role=UserRole(u.role),
        email=u.email,
        display_name=u.name,
    )


def authenticate(db: Session, email: str, password: str) -> Principal | None:
    u = db.execute(
        select(User).where(User.email == email.strip().lower())
    ).scalar_one_or_none()

    if not u:
        logger.info("login failed: unknown email")
        return None

    if not verify_password(password, u.password_hash):
        logger.info("login failed: bad password", extra={"user_id": u.id})
        return None

    return _principal(u)


def create_user(
    db: Session,
    *,
    email: str,
    password: str,
    role: UserRole,
    name: str,
    department: str | None = None,
) -> User:
    u = User(
        email=email.strip().lower(),
        password_hash=hash_password(password),
        role=UserRole(role).value,
        name=name,
        department=department,
    )
    db.add(u)
    db.commit()
    db.refresh(u)
    return u
