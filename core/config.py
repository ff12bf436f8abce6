from __future__ import annotations

import os

from pydantic import BaseModel


class Settings(BaseModel):
    SECRET_KEY: str = os.getenv("SECRET_KEY", "dev-change-me")
    ACCESS_TOKEN_EXPIRE_MIN: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MIN", "60"))

    # simple single-user creds via env
    ADMIN_USER: str = os.getenv("ADMIN_USER", "admin")
    ADMIN_USER_ID: str = os.getenv("ADMIN_USER_ID", "admin")
    ADMIN_PWD_HASH: str | None = os.getenv("ADMIN_PWD_HASH")

    AUTH_API_URL: str = os.getenv("AUTH_API_URL", "http://localhost:8000")
    RECORDS_API_URL: str = os.getenv("RECORDS_API_URL", "http://localhost:8001")
    AUTH_TIMEOUT_S: float = float(os.getenv("AUTH_TIMEOUT_S", "10"))
    RECORDS_TIMEOUT_S: float = float(os.getenv("RECORDS_TIMEOUT_S", "15"))
    RECORDS_CACHE_TTL_S: int = int(os.getenv("RECORDS_CACHE_TTL_S", "30"))

    CORS_ALLOW_ORIGINS: list[str] = os.getenv("CORS_ALLOW_ORIGINS", "http://localhost:8501").split(
        ","
    )
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    # console auth backend: "http" (apps.api service) or "local" (in-process)
    AUTH_MODE: str = os.getenv("AUTH_MODE", "http")


settings = Settings()
