"""
Tests for the remote case service client (httpx.MockTransport, no network).
"""
import json

import httpx
import pytest

from ayur_core_lib.clients import CaseServiceClient
from ayur_core_lib.exceptions import (
    CaseNotFoundError,
    EngineError,
    InvalidInputError,
    InvalidTransitionError,
)
from ayur_core_lib.models.case import Case, CaseStatus

from conftest import make_context

BASE_URL = "http://case-service.test"


def client_for(handler, **kwargs) -> CaseServiceClient:
    return CaseServiceClient(base_url=BASE_URL, transport=httpx.MockTransport(handler), **kwargs)


class TestCaseServiceClient:

    @pytest.mark.asyncio
    async def test_create_posts_user_context(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["path"] = request.url.path
            body = json.loads(request.content)
            seen["body"] = body
            case = Case(user_context=body["user_context"])
            return httpx.Response(201, json=case.model_dump(mode="json"))

        case = await client_for(handler).create(make_context())

        assert seen["method"] == "POST"
        assert seen["path"] == "/api/v1/cases"
        assert seen["body"]["user_context"]["sleep_quality"] == "good"
        assert case.status == CaseStatus.CONTEXT_COLLECTED

    @pytest.mark.asyncio
    async def test_get_maps_404_to_not_found(self):
        client = client_for(lambda request: httpx.Response(404, json={"detail": "missing"}))
        with pytest.raises(CaseNotFoundError):
            await client.get("case_000000000000")

    @pytest.mark.asyncio
    async def test_update_patches_json_fields_with_correlation_id(self):
        stored = Case(user_context=make_context())
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["body"] = json.loads(request.content)
            seen["correlation"] = request.headers.get("X-Correlation-ID")
            merged = stored.model_copy(update={"status": CaseStatus(seen["body"]["status"])})
            return httpx.Response(200, json=merged.model_dump(mode="json"))

        client = client_for(handler, correlation_id="corr-1")
        updated = await client.update(stored.case_id, {"status": CaseStatus.COMPLETED})

        assert seen == {"method": "PATCH", "body": {"status": "completed"}, "correlation": "corr-1"}
        assert updated.status == CaseStatus.COMPLETED

    @pytest.mark.asyncio
    async def test_list_cases(self):
        cases = [Case(user_context=make_context()) for _ in range(2)]
        client = client_for(
            lambda request: httpx.Response(200, json=[c.model_dump(mode="json") for c in cases])
        )
        assert await client.list_cases() == cases

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code,error", [
        (400, InvalidInputError),
        (422, InvalidInputError),
        (409, InvalidTransitionError),
        (503, EngineError),
    ])
    async def test_error_statuses(self, status_code, error):
        client = client_for(lambda request: httpx.Response(status_code, text="nope"))
        with pytest.raises(error):
            await client.get("case_000000000000")

    @pytest.mark.asyncio
    async def test_transport_errors_are_retried(self):
        stored = Case(user_context=make_context())
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            if len(calls) == 1:
                raise httpx.ConnectError("connection refused", request=request)
            return httpx.Response(200, json=stored.model_dump(mode="json"))

        case = await client_for(handler).get(stored.case_id)
        assert case == stored
        assert len(calls) == 2
