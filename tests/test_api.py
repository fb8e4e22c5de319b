"""
Tests for the FastAPI surface (ASGITransport, no network).
"""
import pytest
from httpx import ASGITransport, AsyncClient

from ayur_core_lib.api import create_app
from ayur_core_lib.catalog.guidance import DISCLAIMER


@pytest.fixture
def app(aggregator):
    return create_app(aggregator)


@pytest.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def create_case(client, context_payload):
    response = await client.post("/api/cases", json={"user_context": context_payload})
    assert response.status_code == 201
    return response.json()["case_id"]


class TestCaseRoutes:

    @pytest.mark.asyncio
    async def test_symptom_listing(self, client):
        response = await client.get("/api/symptoms")
        assert response.status_code == 200
        assert len(response.json()) == 24

    @pytest.mark.asyncio
    async def test_full_gated_flow(self, client, context_payload):
        case_id = await create_case(client, context_payload)

        scored = await client.post(f"/api/cases/{case_id}/symptoms", json={"selected_symptom_ids": [10]})
        assert scored.status_code == 200
        body = scored.json()
        assert body["status"] == "confirmation_gate"
        assert body["confirmation_gate"]["required_inputs"] == ["tongue_image"]
        assert body["next_steps_options"]["medicines_enabled"] is False
        assert body["disclaimer"] == DISCLAIMER

        evidence = await client.post(
            f"/api/cases/{case_id}/advanced-inputs", json={"tongue_image_ref": "img://tongue"}
        )
        assert evidence.status_code == 200
        assert evidence.json()["status"] == "diagnosis_complete"
        assert evidence.json()["next_steps_options"]["medicines_enabled"] is True

        fetched = await client.get(f"/api/cases/{case_id}")
        assert fetched.json()["status"] == "diagnosis_complete"

        done = await client.post(f"/api/cases/{case_id}/feedback", json={"was_helpful": True})
        assert done.json()["status"] == "completed"

    @pytest.mark.asyncio
    async def test_doctor_review_flow(self, client, context_payload):
        case_id = await create_case(client, context_payload)
        await client.post(f"/api/cases/{case_id}/symptoms", json={"selected_symptom_ids": [2, 8]})

        review = await client.post(f"/api/cases/{case_id}/doctor-review", json={"consent_given": True})
        assert review.json()["status"] == "awaiting_doctor_review"

        decision = await client.post(
            f"/api/cases/{case_id}/doctor-decision", json={"decision": "modified"}
        )
        assert decision.json()["status"] == "doctor_approved"

    @pytest.mark.asyncio
    async def test_admin_stats(self, client, context_payload):
        case_id = await create_case(client, context_payload)
        await client.post(f"/api/cases/{case_id}/symptoms", json={"selected_symptom_ids": [10]})

        stats = (await client.get("/api/admin/stats")).json()
        assert stats["user_count"] == 1
        assert stats["advanced_input_triggers"] == 1


class TestErrorMapping:

    @pytest.mark.asyncio
    async def test_unknown_case_is_404(self, client):
        response = await client.get(
            "/api/cases/case_000000000000", headers={"X-Correlation-ID": "corr-42"}
        )
        assert response.status_code == 404
        assert response.json() == {
            "error": "Case not found: case_000000000000",
            "code": "not_found",
            "correlation_id": "corr-42",
        }

    @pytest.mark.asyncio
    async def test_empty_selection_is_422(self, client, context_payload):
        case_id = await create_case(client, context_payload)
        response = await client.post(f"/api/cases/{case_id}/symptoms", json={"selected_symptom_ids": []})
        assert response.status_code == 422
        assert response.json()["code"] == "validation_error"

    @pytest.mark.asyncio
    async def test_missing_consent_is_400(self, client, context_payload):
        case_id = await create_case(client, context_payload)
        await client.post(f"/api/cases/{case_id}/symptoms", json={"selected_symptom_ids": [2, 8]})
        response = await client.post(f"/api/cases/{case_id}/doctor-review", json={"consent_given": False})
        assert response.status_code == 400
        assert response.json()["code"] == "invalid_input"

    @pytest.mark.asyncio
    async def test_completed_case_is_409(self, client, context_payload):
        case_id = await create_case(client, context_payload)
        await client.post(f"/api/cases/{case_id}/feedback", json={"was_helpful": False})
        response = await client.post(f"/api/cases/{case_id}/symptoms", json={"selected_symptom_ids": [1]})
        assert response.status_code == 409
        assert response.json()["code"] == "invalid_transition"
