import httpx
import pytest

from domain.models import Applicant, ApplicationStatus
from services.persistence.records import RecordsClient, RecordsError


def _client(handler, token=None) -> RecordsClient:
    return RecordsClient(base_url="http://records.test", token=token, transport=httpx.MockTransport(handler))


def test_lists_applicants_with_bearer_token():
    seen = {}

    def handler(request):
        seen["auth"] = request.headers.get("Authorization")
        seen["path"] = request.url.path
        return httpx.Response(200, json=[{"id": "a1", "full_name": "Ada Lovelace", "extra": 1}])

    rows = _client(handler, token="tok").list("applicants")

    assert rows == [Applicant(id="a1", full_name="Ada Lovelace")]
    assert seen == {"auth": "Bearer tok", "path": "/applicants"}


def test_accepts_wrapped_payload():
    def handler(request):
        return httpx.Response(
            200,
            json={"applications": [{"id": "x", "applicant_id": "a1", "program_id": "p1", "status": "submitted"}]},
        )

    rows = _client(handler).list("applications")

    assert rows[0].status is ApplicationStatus.SUBMITTED


def test_http_error_is_records_error():
    with pytest.raises(RecordsError, match="could not load programs"):
        _client(lambda request: httpx.Response(502)).list("programs")


def test_invalid_payload_is_records_error():
    with pytest.raises(RecordsError, match="unexpected programs payload"):
        _client(lambda request: httpx.Response(200, json=[{"id": "p1"}])).list("programs")


def test_unknown_kind():
    with pytest.raises(RecordsError, match="unknown record kind"):
        _client(lambda request: httpx.Response(200, json=[])).list("invoices")
