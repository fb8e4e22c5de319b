"""Ayur Core Library

Dual constitutional (dosha) and risk assessment with a confirmation gate that
keeps medicine recommendations locked until risk is low or evidence arrives.
"""

__version__ = "0.1.0"

# Export shared models first (the catalog depends on them)
from ayur_core_lib.models import (
    Case, CaseStatus, CaseResponse, UserContext, SymptomInput, AdvancedInputs,
    DiagnosisResult, ConfirmationGateResult, DoshaType, RiskLevel,
)

from ayur_core_lib.exceptions import (
    AyurCoreError,
    CaseNotFoundError,
    InvalidInputError,
    InvalidTransitionError,
    EngineError,
)

from ayur_core_lib.core import CaseAggregator
from ayur_core_lib.storage import CaseStore, InMemoryCaseStore, RedisCaseStore
from ayur_core_lib.analytics import CounterSink, InMemoryCounterSink, NullCounterSink


# Lazy import for the HTTP client; it is only needed with the remote backend
def __getattr__(name):
    """Lazy import for CaseServiceClient."""
    if name == "CaseServiceClient":
        from ayur_core_lib.clients import CaseServiceClient
        return CaseServiceClient
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")


__all__ = [
    # Models
    "Case", "CaseStatus", "CaseResponse", "UserContext", "SymptomInput",
    "AdvancedInputs", "DiagnosisResult", "ConfirmationGateResult",
    "DoshaType", "RiskLevel",
    # Errors
    "AyurCoreError", "CaseNotFoundError", "InvalidInputError",
    "InvalidTransitionError", "EngineError",
    # Engine
    "CaseAggregator",
    # Storage & analytics
    "CaseStore", "InMemoryCaseStore", "RedisCaseStore",
    "CounterSink", "InMemoryCounterSink", "NullCounterSink",
    # Clients (lazy loaded)
    "CaseServiceClient",
    "__version__",
]
