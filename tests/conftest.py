import asyncio

import pytest

from core.security import hash_password
from domain.models import Credentials, Identity

PASSWORD = "s3cret"


@pytest.fixture(scope="session")
def admin_hash() -> str:
    return hash_password(PASSWORD)


class FakeProvider:
    """Scriptable auth provider: records calls, can fail or stall on demand."""

    def __init__(self, identity: Identity | None = None, delay: float = 0.0):
        self.identity = identity or Identity(id="u1")
        self.delay = delay
        self.sign_in_error: Exception | None = None
        self.sign_out_error: Exception | None = None
        self.calls: list[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def _enter(self, name: str) -> None:
        self.calls.append(name)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
        finally:
            self.in_flight -= 1

    async def sign_in(self, credentials: Credentials) -> Identity:
        await self._enter("sign_in")
        if self.sign_in_error:
            raise self.sign_in_error
        return self.identity

    async def sign_out(self) -> None:
        await self._enter("sign_out")
        if self.sign_out_error:
            raise self.sign_out_error


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def creds() -> Credentials:
    return Credentials(username="alice", password=PASSWORD)
