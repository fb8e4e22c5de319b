"""API Request/Response Models for Case Management.

These models provide a clean API layer separate from the domain Case model.
They handle:
- Request validation
- Response serialization (every case response carries the disclaimer)
- Admin statistics
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from ayur_core_lib.catalog.guidance import DISCLAIMER
from ayur_core_lib.models.case import (
    AdvancedInputs,
    Case,
    DoctorDecision,
    SymptomInput,
    UserContext,
)


# ============================================================
# Requests
# ============================================================

class CaseCreateRequest(BaseModel):
    """Request to create a new case from the intake questionnaire."""

    user_context: UserContext


class SubmitSymptomsRequest(SymptomInput):
    """Symptom selection for an existing case (case id comes from the path)."""


class SubmitAdvancedInputsRequest(AdvancedInputs):
    """Evidence for a gated case (case id comes from the path)."""


class FeedbackRequest(BaseModel):
    was_helpful: bool
    symptoms_improved: Optional[bool] = None
    side_effects: Optional[str] = Field(default=None, max_length=2000)
    additional_comments: Optional[str] = Field(default=None, max_length=2000)


class DoctorReviewRequest(BaseModel):
    """User consent to share the case file with a practitioner."""

    consent_given: bool


class DoctorDecisionRequest(DoctorDecision):
    """Practitioner verdict on a case under review."""


# ============================================================
# Responses
# ============================================================

class CaseResponse(Case):
    """Case as returned to callers. Always carries the disclaimer."""

    disclaimer: str = Field(default=DISCLAIMER)

    @classmethod
    def from_case(cls, case: Case) -> 'CaseResponse':
        return cls(**dict(case), disclaimer=DISCLAIMER)


class SymptomCount(BaseModel):
    symptom: str
    count: int = Field(ge=0)


class DoshaPatternCounts(BaseModel):
    vata: int = 0
    pitta: int = 0
    kapha: int = 0


class DropOffPoint(BaseModel):
    stage: str
    count: int = Field(ge=0)
    percentage: int = Field(ge=0)


class AdminStats(BaseModel):
    """Aggregate view over all stored cases plus analytics counters."""

    user_count: int = Field(ge=0)
    common_symptoms: List[SymptomCount] = Field(default_factory=list)
    dosha_patterns: DoshaPatternCounts = Field(default_factory=DoshaPatternCounts)
    drop_off_points: List[DropOffPoint] = Field(default_factory=list)
    advanced_input_triggers: int = Field(default=0, ge=0)
    safety_flags: int = Field(default=0, ge=0)
