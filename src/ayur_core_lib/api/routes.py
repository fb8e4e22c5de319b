"""FastAPI routes over a CaseAggregator.

The router is a thin adapter: it validates request bodies, delegates to the
aggregator and lets register_error_handlers() render engine exceptions.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, FastAPI, status

from ayur_core_lib.api.error_handlers import register_error_handlers
from ayur_core_lib.api.request_context import RequestContext, get_request_context
from ayur_core_lib.catalog.symptoms import Symptom
from ayur_core_lib.core.aggregator import CaseAggregator
from ayur_core_lib.models.api_models import (
    AdminStats,
    CaseCreateRequest,
    CaseResponse,
    DoctorDecisionRequest,
    DoctorReviewRequest,
    FeedbackRequest,
    SubmitAdvancedInputsRequest,
    SubmitSymptomsRequest,
)

logger = logging.getLogger(__name__)


def create_router(aggregator: CaseAggregator) -> APIRouter:
    """Build the case API router bound to one aggregator instance."""
    router = APIRouter()

    @router.get("/symptoms", response_model=List[Symptom])
    async def list_symptoms():
        return aggregator.list_symptoms()

    @router.post("/cases", response_model=CaseResponse, status_code=status.HTTP_201_CREATED)
    async def create_case(
        body: CaseCreateRequest,
        ctx: RequestContext = Depends(get_request_context),
    ):
        return await aggregator.create_case(body.user_context)

    @router.get("/cases/{case_id}", response_model=CaseResponse)
    async def get_case(case_id: str, ctx: RequestContext = Depends(get_request_context)):
        return await aggregator.get_case(case_id)

    @router.post("/cases/{case_id}/symptoms", response_model=CaseResponse)
    async def submit_symptoms(
        case_id: str,
        body: SubmitSymptomsRequest,
        ctx: RequestContext = Depends(get_request_context),
    ):
        return await aggregator.submit_symptoms(case_id, body)

    @router.post("/cases/{case_id}/advanced-inputs", response_model=CaseResponse)
    async def submit_advanced_inputs(
        case_id: str,
        body: SubmitAdvancedInputsRequest,
        ctx: RequestContext = Depends(get_request_context),
    ):
        return await aggregator.submit_advanced_inputs(case_id, body)

    @router.post("/cases/{case_id}/feedback", response_model=CaseResponse)
    async def submit_feedback(
        case_id: str,
        body: FeedbackRequest,
        ctx: RequestContext = Depends(get_request_context),
    ):
        return await aggregator.submit_feedback(case_id, body)

    @router.post("/cases/{case_id}/doctor-review", response_model=CaseResponse)
    async def request_doctor_review(
        case_id: str,
        body: DoctorReviewRequest,
        ctx: RequestContext = Depends(get_request_context),
    ):
        return await aggregator.request_doctor_review(case_id, body.consent_given)

    @router.post("/cases/{case_id}/doctor-decision", response_model=CaseResponse)
    async def record_doctor_decision(
        case_id: str,
        body: DoctorDecisionRequest,
        ctx: RequestContext = Depends(get_request_context),
    ):
        return await aggregator.record_doctor_decision(case_id, body)

    @router.get("/admin/stats", response_model=AdminStats)
    async def admin_stats(ctx: RequestContext = Depends(get_request_context)):
        return await aggregator.admin_stats()

    return router


def create_app(aggregator: CaseAggregator, prefix: str = "/api") -> FastAPI:
    """Standalone FastAPI app: the case router plus error handlers."""
    app = FastAPI(title="ayur-core-lib")
    app.include_router(create_router(aggregator), prefix=prefix)
    register_error_handlers(app)
    return app
