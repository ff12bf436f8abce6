from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.security import OAuth2PasswordRequestForm
from jose import JWTError

from apps.api.deps import get_current_active_user, get_settings
from core.config import Settings
from core.security import create_access_token, oauth2_scheme, revoke_token, verify_password
from domain.models import Identity

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/token")
def login(
    form: OAuth2PasswordRequestForm = Depends(),  # noqa: B008 (FastAPI)
    cfg: Settings = Depends(get_settings),  # noqa: B008
):
    if not cfg.ADMIN_PWD_HASH:
        raise HTTPException(500, "server not configured: ADMIN_PWD_HASH missing")
    if form.username != cfg.ADMIN_USER or not verify_password(form.password, cfg.ADMIN_PWD_HASH):
        logger.info("rejected login for %r", form.username)
        raise HTTPException(401, "bad credentials")
    tok = create_access_token(
        sub=cfg.ADMIN_USER_ID, minutes=cfg.ACCESS_TOKEN_EXPIRE_MIN, username=cfg.ADMIN_USER
    )
    return {"access_token": tok, "token_type": "bearer"}


@router.get("/me", response_model=Identity)
def me(user: Identity = Depends(get_current_active_user)):  # noqa: B008
    return user


@router.post("/logout")
def logout(token: str = Depends(oauth2_scheme)):  # noqa: B008
    try:
        revoke_token(token)
    except JWTError as e:
        raise HTTPException(401, "invalid or expired token") from e
    return {}
