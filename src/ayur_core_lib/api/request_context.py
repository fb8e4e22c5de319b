"""Request context extraction from inbound HTTP headers.

The only context the engine needs is a correlation id for tracing a request
through logs and downstream case-service calls.
"""

import logging
from dataclasses import dataclass
from uuid import uuid4

from fastapi import Request

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


@dataclass
class RequestContext:
    """Per-request context.

    Attributes:
        correlation_id: From X-Correlation-ID, or generated when absent
        path: Request path, for log lines
    """

    correlation_id: str
    path: str = ""


def correlation_id_for(request: Request) -> str:
    return request.headers.get(CORRELATION_HEADER) or f"corr_{uuid4().hex[:12]}"


def get_request_context(request: Request) -> RequestContext:
    """FastAPI dependency: build the RequestContext and log the request."""
    context = RequestContext(
        correlation_id=correlation_id_for(request),
        path=request.url.path,
    )
    logger.info(f"{request.method} {context.path} correlation_id={context.correlation_id}")
    return context
