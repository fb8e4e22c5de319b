"""Base HTTP client for calls to companion services."""

import logging
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


class BaseServiceClient:
    """Shared plumbing for service-to-service HTTP clients.

    Every request runs on a short-lived httpx.AsyncClient and carries the
    client's correlation id, if one is set. Subclasses call ``_request`` and
    interpret the response.

    Usage:
        class CaseServiceClient(BaseServiceClient):
            async def get(self, case_id: str) -> Case:
                response = await self._request("GET", f"/api/v1/cases/{case_id}")
                return Case.model_validate(response.json())
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        correlation_id: Optional[str] = None,
    ):
        """
        Args:
            base_url: Service base URL (e.g., http://ayur-case-service:8000)
            timeout: Request timeout in seconds
            transport: httpx transport override; tests pass httpx.MockTransport
            correlation_id: Sent as X-Correlation-ID on every request
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.correlation_id = correlation_id
        self._transport = transport

        logger.info(f"{self.__class__.__name__} targeting {self.base_url}")

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.correlation_id:
            headers[CORRELATION_HEADER] = self.correlation_id
        return headers

    async def _request(self, method: str, path: str, json: Any = None) -> httpx.Response:
        """Send one request and return the response whatever its status.

        Raises:
            httpx.TransportError: connection failures and timeouts
        """
        async with httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
        ) as client:
            response = await client.request(method, path, json=json, headers=self._headers())
        logger.debug(f"{method} {path} -> {response.status_code}")
        return response

    async def close(self):
        """No persistent connections are held; present for the store contract."""
