"""Exception taxonomy for the assessment engine.

Callers see four failure kinds:
- CaseNotFoundError: referenced case id does not exist in the store
- InvalidInputError: structurally invalid payload, rejected before scoring
- InvalidTransitionError: operation not allowed in the case's current status
- EngineError: unexpected failure inside scoring (no case mutation committed)
"""

from typing import Any, Dict, List, Optional


class AyurCoreError(Exception):
    """Base class for all engine errors."""

    code: str = "internal"

    def __init__(self, message: str, details: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or []


class CaseNotFoundError(AyurCoreError):
    """Raised when a case id is unknown to the case store."""

    code = "not_found"

    def __init__(self, case_id: str):
        super().__init__(f"Case not found: {case_id}")
        self.case_id = case_id


class InvalidInputError(AyurCoreError):
    """Raised when a request payload fails validation."""

    code = "invalid_input"


class InvalidTransitionError(AyurCoreError):
    """Raised when an operation is not allowed in the current case status."""

    code = "invalid_transition"


class EngineError(AyurCoreError):
    """Raised when scoring or gate evaluation fails unexpectedly."""

    code = "internal"
