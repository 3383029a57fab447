# gradverify/api/v1/auth.py
from __future__ import annotations

from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy.orm import Session

from gradverify.core.auth_deps import get_current_principal
from gradverify.core.security import create_access_token
from gradverify.db.session import get_db
from gradverify.policies.rbac import Principal
from gradverify.schemas.auth import LoginRequest, MeResponse, TokenResponse
from gradverify.services.auth_service import authenticate

router = APIRouter(prefix="/auth")


@router.post("/login", response_model=TokenResponse)
def login(req: LoginRequest, db: Session = Depends(get_db)):
    principal = authenticate(db, req.email, req.password)
    if not principal:
        raise HTTPException(status_code=401, detail="Invalid email or password.")

    token = create_access_token(
        principal.user_id,
        role=principal.role.value,
        email=principal.email,
        display_name=principal.display_name,
    )
    return TokenResponse(access_token=token)


@router.get("/me", response_model=MeResponse)
def get_me(principal: Principal = Depends(get_current_principal)):
    return MeResponse(
        user_id=principal.user_id,
        email=principal.email,
        role=principal.role.value,
        display_name=principal.display_name,
    )
