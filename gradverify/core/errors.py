# gradverify/core/errors.py
from __future__ import annotations

from typing import Any, Optional


class VerificationError(Exception):
    """Base for every domain failure raised by the verification services."""


class NotFound(VerificationError, LookupError):
    """Referenced student, document, award or notification does not exist."""


class InvalidArgument(VerificationError, ValueError):
    pass


class Unauthorized(VerificationError, PermissionError):
    """No reviewer identity was supplied for a review action."""


class StepLocked(VerificationError, ValueError):
    """
    Submission targets a step the gate has not unlocked yet.

    Carries the requested step and the step the student is currently on so the
    caller can explain why the form is disabled.
    """

    def __init__(self, step: Any, active_step: Any, reason: str):
        super().__init__(reason)
        self.step = step
        self.active_step = active_step
        self.reason = reason


class AggregateRecomputeFailed(VerificationError, RuntimeError):
    """
    An artifact write (decision, upload or claim) was persisted but the
    derived aggregate was not.

    Retrying the recomputation alone is safe; retrying the original write is not
    needed.
    """

    def __init__(self, student_id: int, artifact: Any = None, cause: Optional[BaseException] = None):
        super().__init__(
            f"Change persisted but aggregate recomputation failed for student {student_id}."
        )
        self.student_id = student_id
        self.artifact = artifact
        self.cause = cause
