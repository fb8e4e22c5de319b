"""HTTP surface: FastAPI router, error mapping and request context."""

from ayur_core_lib.api.request_context import RequestContext, get_request_context
from ayur_core_lib.api.error_handlers import register_error_handlers
from ayur_core_lib.api.routes import create_app, create_router

__all__ = [
    "RequestContext",
    "get_request_context",
    "register_error_handlers",
    "create_router",
    "create_app",
]
