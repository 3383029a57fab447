# gradverify/policies/rbac.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Set

from gradverify.models.enums import REVIEWER_ROLES, UserRole


@dataclass(frozen=True)
class Principal:
    user_id: int
    role: UserRole
    email: str
    display_name: str

    @property
    def is_reviewer(self) -> bool:
        return self.role in REVIEWER_ROLES


# --- Core action constants ---
ACTION_SUBMIT_PROFILE = "SUBMIT_PROFILE"
ACTION_UPLOAD_DOCUMENT = "UPLOAD_DOCUMENT"
ACTION_SUBMIT_AWARD = "SUBMIT_AWARD"
ACTION_REVIEW = "REVIEW"
ACTION_VIEW_DASHBOARD = "VIEW_DASHBOARD"
ACTION_VIEW_STUDENTS = "VIEW_STUDENTS"
ACTION_EDIT_STUDENTS = "EDIT_STUDENTS"

_STUDENT_ACTIONS = {ACTION_SUBMIT_PROFILE, ACTION_UPLOAD_DOCUMENT, ACTION_SUBMIT_AWARD}
_REVIEWER_ACTIONS = {
    ACTION_REVIEW,
    ACTION_VIEW_DASHBOARD,
    ACTION_VIEW_STUDENTS,
    ACTION_EDIT_STUDENTS,
}


def allowed_actions(role: UserRole) -> Set[str]:
    """
    Pure RBAC: which actions a role may attempt.
    """

    if role == UserRole.STUDENT:
        return set(_STUDENT_ACTIONS)

    if role in REVIEWER_ROLES:
        return set(_REVIEWER_ACTIONS)

    return set()


def require_action(principal: Principal, action: str) -> None:
    if action not in allowed_actions(principal.role):
        raise PermissionError(
            f"Role {principal.role.value} not permitted for action {action}."
        )
