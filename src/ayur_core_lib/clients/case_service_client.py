"""HTTP client for a remote case service, usable as a CaseStore."""

import logging
from typing import Any, Dict, List, Optional

import httpx

from ayur_core_lib.clients.base import BaseServiceClient
from ayur_core_lib.exceptions import (
    CaseNotFoundError,
    EngineError,
    InvalidInputError,
    InvalidTransitionError,
)
from ayur_core_lib.models.case import Case, UserContext
from ayur_core_lib.storage.base import CaseStore
from ayur_core_lib.utils import create_custom_retry, to_json_compatible

logger = logging.getLogger(__name__)

# Connection resets and timeouts only; HTTP error statuses are not retried
transport_retry = create_custom_retry(
    max_attempts=3,
    min_wait=0.5,
    max_wait=4,
    multiplier=0.5,
    retry_on=(httpx.TransportError,),
)


class CaseServiceClient(BaseServiceClient, CaseStore):
    """Async HTTP client for a case service exposing the case store contract.

    Endpoints:
        POST  /api/v1/cases            {"user_context": {...}} -> Case
        GET   /api/v1/cases/{case_id}  -> Case
        PATCH /api/v1/cases/{case_id}  {field: value, ...} -> Case
        GET   /api/v1/cases            -> [Case, ...]

    Usage:
        client = CaseServiceClient(base_url="http://ayur-case-service:8000")
        aggregator = CaseAggregator(store=client)
    """

    def __init__(
        self,
        base_url: str = "http://ayur-case-service:8000",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        correlation_id: Optional[str] = None,
    ):
        """Initialize client.

        Args:
            base_url: Base URL of the case service
            timeout: Request timeout in seconds (default: 30.0)
            transport: Optional httpx transport override
            correlation_id: Correlation ID sent with every request
        """
        super().__init__(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
            correlation_id=correlation_id,
        )

    def _raise_for_status(self, response: httpx.Response, case_id: Optional[str] = None) -> None:
        """Map service error statuses onto the engine's exception taxonomy."""
        if response.is_success:
            return
        if response.status_code == 404 and case_id is not None:
            raise CaseNotFoundError(case_id)
        if response.status_code in (400, 422):
            raise InvalidInputError(f"Case service rejected request: {response.text}")
        if response.status_code == 409:
            raise InvalidTransitionError(f"Case service conflict: {response.text}")
        raise EngineError(
            f"Case service returned HTTP {response.status_code} for "
            f"{response.request.method} {response.request.url}"
        )

    @transport_retry
    async def create(self, user_context: UserContext) -> Case:
        response = await self._request(
            "POST", "/api/v1/cases", json={"user_context": user_context.model_dump(mode="json")}
        )
        self._raise_for_status(response)
        return Case.model_validate(response.json())

    @transport_retry
    async def get(self, case_id: str) -> Case:
        response = await self._request("GET", f"/api/v1/cases/{case_id}")
        self._raise_for_status(response, case_id)
        return Case.model_validate(response.json())

    @transport_retry
    async def update(self, case_id: str, fields: Dict[str, Any]) -> Case:
        """PATCH only the given fields; the service performs the merge."""
        response = await self._request(
            "PATCH", f"/api/v1/cases/{case_id}", json=to_json_compatible(fields)
        )
        self._raise_for_status(response, case_id)
        return Case.model_validate(response.json())

    @transport_retry
    async def list_cases(self) -> List[Case]:
        response = await self._request("GET", "/api/v1/cases")
        self._raise_for_status(response)
        return [Case.model_validate(item) for item in response.json()]
