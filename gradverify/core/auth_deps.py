# gradverify/core/auth_deps.py
from __future__ import annotations

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from gradverify.core.security import decode_token
from gradverify.models.enums import UserRole
from gradverify.policies.rbac import Principal, require_action

bearer = HTTPBearer(auto_error=True)


def get_current_principal(
    request: Request,
    creds: HTTPAuthorizationCredentials = Depends(bearer),
) -> Principal:
    """
    Canonical authentication dependency.

    Guarantees:
    - JWT is valid
    - sub (user id) and role are present
    - role is a valid UserRole
    """

    try:
        payload = decode_token(creds.credentials)
    except Exception:
        raise HTTPException(status_code=401, detail="Invalid or expired token.")

    sub = payload.get("sub")
    role = payload.get("role")

    if not sub or not role:
        raise HTTPException(status_code=401, detail="Token missing required claims.")

    try:
        user_id = int(sub)
        role_enum = UserRole(role)
    except ValueError:
        raise HTTPException(status_code=401, detail="Invalid identity in token.")

    principal = Principal(
        user_id=user_id,
        role=role_enum,
        email=str(payload.get("email") or ""),
        display_name=str(payload.get("display_name") or "Unknown"),
    )

    # Make principal available to downstream middleware / handlers
    request.state.principal = principal

    return principal


def require(action: str):
    """
    Dependency factory: authenticated principal allowed to perform `action`.
    """

    def _dep(principal: Principal = Depends(get_current_principal)) -> Principal:
        try:
            require_action(principal, action)
        except PermissionError as e:
            raise HTTPException(status_code=403, detail=str(e))
        return principal

    return _dep
