"""HTTP clients for companion services."""

from ayur_core_lib.clients.base import BaseServiceClient
from ayur_core_lib.clients.case_service_client import CaseServiceClient

__all__ = ["BaseServiceClient", "CaseServiceClient"]
