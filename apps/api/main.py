# apps/api/main.py
# Auth service behind the console's HttpAuthProvider.

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from apps.api.routers import auth
from core.config import settings
from core.logging import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    configure_logging()
    if not settings.ADMIN_PWD_HASH:
        logger.warning("ADMIN_PWD_HASH not set: /auth/token will answer 500")
    yield


app = FastAPI(title="ApplicantsDB Auth API", version="0.1.0", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)


@app.get("/healthz")
def healthz() -> dict[str, str]:
    return {"status": "ok"}
