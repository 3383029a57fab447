import pytest

from gradverify.models.enums import UserRole
from gradverify.policies.rbac import (
    ACTION_EDIT_STUDENTS,
    ACTION_REVIEW,
    ACTION_SUBMIT_PROFILE,
    ACTION_UPLOAD_DOCUMENT,
    ACTION_VIEW_DASHBOARD,
    Principal,
    allowed_actions,
    require_action,
)


def _p(role):
    return Principal(user_id=1, role=role, email="x@example.edu", display_name="X")


@pytest.mark.parametrize("role", [UserRole.FACULTY, UserRole.ADMIN, UserRole.SUPERADMIN])
def test_reviewer_roles_can_review(role):
    require_action(_p(role), ACTION_REVIEW)
    assert _p(role).is_reviewer


def test_student_cannot_review():
    with pytest.raises(PermissionError):
        require_action(_p(UserRole.STUDENT), ACTION_REVIEW)


def test_reviewer_cannot_upload():
    with pytest.raises(PermissionError):
        require_action(_p(UserRole.ADMIN), ACTION_UPLOAD_DOCUMENT)


def test_student_actions():
    actions = allowed_actions(UserRole.STUDENT)
    assert ACTION_SUBMIT_PROFILE in actions
    assert ACTION_VIEW_DASHBOARD not in actions


def test_only_reviewers_edit_students():
    require_action(_p(UserRole.FACULTY), ACTION_EDIT_STUDENTS)
    with pytest.raises(PermissionError):
        require_action(_p(UserRole.STUDENT), ACTION_EDIT_STUDENTS)
