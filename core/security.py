from __future__ import annotations

import time
import uuid
from typing import Any

from fastapi import Depends, HTTPException
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.context import CryptContext

from core.config import settings
from domain.models import Identity

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/token")
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
ALGO = "HS256"

# jti -> exp of signed-out tokens; entries go once the token would have expired anyway
_revoked: dict[str, int] = {}


def hash_password(plain: str) -> str:
    return pwd_context.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    try:
        return pwd_context.verify(plain, hashed)
    except ValueError:
        # malformed hash in config
        return False


def create_access_token(sub: str, minutes: int, username: str | None = None) -> str:
    now = int(time.time())
    payload = {
        "sub": sub,
        "name": username,
        "jti": uuid.uuid4().hex,
        "iat": now,
        "exp": now + minutes * 60,
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=ALGO)


def decode_token(tok: str) -> dict[str, Any]:
    payload = jwt.decode(tok, settings.SECRET_KEY, algorithms=[ALGO])
    if payload.get("jti") in _revoked:
        raise JWTError("token revoked")
    return payload


def revoke_token(tok: str) -> None:
    payload = decode_token(tok)
    now = int(time.time())
    for jti in [j for j, exp in _revoked.items() if exp <= now]:
        del _revoked[jti]
    _revoked[payload["jti"]] = int(payload.get("exp", now))


def identity_from_token(tok: str) -> Identity:
    payload = decode_token(tok)
    return Identity(id=payload["sub"], username=payload.get("name"))


def get_current_user(token: str = Depends(oauth2_scheme)) -> Identity:
    try:
        return identity_from_token(token)
    except (JWTError, KeyError):
        raise HTTPException(401, "invalid or expired token")
