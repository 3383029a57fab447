from fastapi import APIRouter

from gradverify.api.v1.health import router as health_router
from gradverify.api.v1.auth import router as auth_router
from gradverify.api.v1.student_portal import router as student_portal_router
from gradverify.api.v1.review import router as review_router
from gradverify.api.v1.students import router as students_router
from gradverify.api.v1.dashboard import router as dashboard_router
from gradverify.api.v1.notifications import router as notifications_router


v1_router = APIRouter()

# ------------------------------------------------------------------
# SYSTEM / CORE
# ------------------------------------------------------------------
v1_router.include_router(health_router, tags=["health"])
v1_router.include_router(auth_router, tags=["auth"])

# ------------------------------------------------------------------
# STUDENT PORTAL
# ------------------------------------------------------------------
v1_router.include_router(student_portal_router, tags=["student"])
v1_router.include_router(notifications_router, tags=["notifications"])

# ------------------------------------------------------------------
# REVIEWERS
# ------------------------------------------------------------------
v1_router.include_router(review_router, tags=["review"])
v1_router.include_router(students_router, tags=["students"])
v1_router.include_router(dashboard_router, tags=["dashboard"])
