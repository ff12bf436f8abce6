from __future__ import annotations

from typing import Literal

import httpx
from pydantic import BaseModel, ValidationError

from core.config import settings
from domain.models import Applicant, Application, Program

RecordKind = Literal["applicants", "programs", "applications"]

MODELS: dict[str, type[BaseModel]] = {
    "applicants": Applicant,
    "programs": Program,
    "applications": Application,
}


class RecordsError(Exception): ...


class RecordsClient:
    """Read-only client for the records backend (GET /<kind>)."""

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        timeout_s: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self.base_url = (base_url or settings.RECORDS_API_URL).rstrip("/")
        self.token = token
        self.timeout_s = timeout_s or settings.RECORDS_TIMEOUT_S
        self._transport = transport

    def list(self, kind: RecordKind) -> list[BaseModel]:
        model = MODELS.get(kind)
        if model is None:
            raise RecordsError(f"unknown record kind: {kind}")
        headers = {"Authorization": f"Bearer {self.token}"} if self.token else {}
        try:
            with httpx.Client(
                base_url=self.base_url, timeout=self.timeout_s, transport=self._transport
            ) as client:
                r = client.get(f"/{kind}", headers=headers)
            r.raise_for_status()
            data = r.json()
            # accept both a bare list and {"<kind>": [...]}
            rows = data.get(kind, []) if isinstance(data, dict) else data
            return [model.model_validate(row) for row in rows]
        except ValidationError as e:
            raise RecordsError(f"unexpected {kind} payload: {e.error_count()} invalid field(s)") from e
        except Exception as e:  # noqa: BLE001
            raise RecordsError(f"could not load {kind}: {e}") from e
