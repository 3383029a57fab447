# gradverify/api/v1/errors.py
from __future__ import annotations

from fastapi import HTTPException

from gradverify.core.config import get_settings
from gradverify.core.errors import (
    AggregateRecomputeFailed,
    InvalidArgument,
    NotFound,
    StepLocked,
    Unauthorized,
)


def http_error(e: Exception) -> HTTPException:
    """
    Map a service-layer exception to the HTTP response the client sees.
    """
    if isinstance(e, NotFound):
        return HTTPException(status_code=404, detail=str(e))
    if isinstance(e, StepLocked):
        return HTTPException(
            status_code=409,
            detail={
                "error": "step_locked",
                "step": e.step.value,
                "active_step": e.active_step.value,
                "reason": e.reason,
            },
        )
    if isinstance(e, InvalidArgument):
        return HTTPException(status_code=400, detail=str(e))
    if isinstance(e, Unauthorized):
        return HTTPException(status_code=401, detail=str(e))
    if isinstance(e, AggregateRecomputeFailed):
        return HTTPException(
            status_code=503,
            detail={
                "error": "aggregate_recompute_failed",
                "message": "The change was saved but the student's overall status could not be refreshed.",
                "student_id": e.student_id,
                "repair": f"{get_settings().api_prefix}/review/students/{e.student_id}/recompute",
            },
        )
    if isinstance(e, PermissionError):
        return HTTPException(status_code=403, detail=str(e))
    return HTTPException(status_code=500, detail="Internal error.")
