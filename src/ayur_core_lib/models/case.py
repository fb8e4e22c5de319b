"""Case data models - the aggregate root of one health check.

Key Models:
- Case: root entity tracking one submission through intake, scoring, gating
  and outcome
- CaseStatus: lifecycle status (CONTEXT_COLLECTED → ... → COMPLETED)
- UserContext / SymptomInput: immutable user-supplied inputs
- AdvancedInputs: evidence submitted after the confirmation gate fires
- HealthSnapshot / PreventiveGuidance / MedicalAwareness: user-facing output
- NextStepsOptions: unlock flags (lifestyle always on, medicines gated)
- DoctorCaseFile / DoctorDecision: optional practitioner review
- UserFeedback: terminal feedback record

Architecture:
- The case store owns cases; the engine receives a snapshot, computes derived
  fields and hands back a partial update
- status_history is an append-only audit trail of status changes
"""

from datetime import datetime
from enum import Enum
from typing import List, Literal, Optional
from uuid import uuid4

from pydantic import BaseModel, Field, field_validator, model_validator

from ayur_core_lib.models.assessment import (
    ConfirmationGateResult,
    ConstitutionalAssessment,
    DiagnosisResult,
    DoshaBalance,
)
from ayur_core_lib.models.common import (
    ActivityLevel,
    AgeRange,
    CityTier,
    DoshaType,
    Gender,
    ImbalanceLevel,
    PrimaryGoal,
    SleepQuality,
    StressLevel,
    utc_now,
)


# ============================================================
# Status & Lifecycle Models
# ============================================================

class CaseStatus(str, Enum):
    """
    Case lifecycle status.

    Lifecycle Flow:
      CONTEXT_COLLECTED → SYMPTOMS_SUBMITTED → CONFIRMATION_GATE → AWAITING_ADVANCED_INPUTS
                                            ↘ DIAGNOSIS_COMPLETE ←──────────────┘
      DIAGNOSIS_COMPLETE → AWAITING_DOCTOR_REVIEW → DOCTOR_APPROVED | DOCTOR_REJECTED
      any non-terminal → COMPLETED (feedback)

    Resubmitting symptoms restarts the case from SYMPTOMS_SUBMITTED.
    Terminal State: COMPLETED
    """

    CONTEXT_COLLECTED = "context_collected"
    SYMPTOMS_SUBMITTED = "symptoms_submitted"
    """Transient: scoring is in progress for this submission"""

    CONFIRMATION_GATE = "confirmation_gate"
    """Gate fired; medicines locked until evidence arrives"""

    AWAITING_ADVANCED_INPUTS = "awaiting_advanced_inputs"
    """Evidence was submitted but does not cover every required input"""

    DIAGNOSIS_COMPLETE = "diagnosis_complete"
    AWAITING_DOCTOR_REVIEW = "awaiting_doctor_review"
    DOCTOR_APPROVED = "doctor_approved"
    DOCTOR_REJECTED = "doctor_rejected"
    COMPLETED = "completed"
    """TERMINAL STATE: feedback received, no further engine logic applies"""

    @property
    def is_terminal(self) -> bool:
        return self == CaseStatus.COMPLETED


class CaseStatusTransition(BaseModel):
    """
    Record of one status change.
    Provides audit trail for case lifecycle.
    """

    from_status: CaseStatus
    to_status: CaseStatus
    triggered_at: datetime = Field(default_factory=utc_now)
    reason: str = Field(max_length=500)

    class Config:
        frozen = True


# ============================================================
# User Inputs
# ============================================================

class UserContext(BaseModel):
    """Lifestyle and demographic snapshot captured once per case."""

    age_range: AgeRange
    gender: Optional[Gender] = None
    city_tier: CityTier
    sleep_quality: SleepQuality
    stress_level: StressLevel
    activity_level: ActivityLevel
    primary_goal: PrimaryGoal

    class Config:
        frozen = True


class SymptomInput(BaseModel):
    """The user's symptom selection. Replaced wholesale on resubmission."""

    selected_symptom_ids: List[int] = Field(
        description="Catalog ids; non-empty, no duplicates"
    )

    free_text: Optional[str] = Field(
        default=None,
        max_length=2000,
        description="Additional description. Reserved; not used by scoring."
    )

    @field_validator('selected_symptom_ids')
    @classmethod
    def ids_present_and_unique(cls, v):
        if not v:
            raise ValueError("At least one symptom must be selected")
        if len(set(v)) != len(v):
            raise ValueError("Symptom ids must be unique")
        return v

    class Config:
        frozen = True


class AdvancedInputs(BaseModel):
    """Evidence supplied after the confirmation gate fired."""

    skin_image_ref: Optional[str] = None
    tongue_image_ref: Optional[str] = None
    face_image_ref: Optional[str] = None
    doctor_consultation_completed: Optional[bool] = None
    notes: Optional[str] = Field(default=None, max_length=2000)

    @property
    def has_any_evidence(self) -> bool:
        return any([
            self.skin_image_ref,
            self.tongue_image_ref,
            self.face_image_ref,
            self.doctor_consultation_completed,
            self.notes,
        ])

    class Config:
        frozen = True


# ============================================================
# User-Facing Output
# ============================================================

class DoshaImbalance(BaseModel):
    primary: DoshaType
    level: ImbalanceLevel


class HealthSnapshot(BaseModel):
    """Plain-language summary for display"""

    summary: str
    dosha_imbalance: DoshaImbalance
    dosha_visualization: DoshaBalance


class PreventiveGuidance(BaseModel):
    """Lifestyle suggestions. NOT prescriptions."""

    habits: List[str] = Field(default_factory=list)
    food_preferences: List[str] = Field(default_factory=list)
    sleep_tips: List[str] = Field(default_factory=list)
    stress_tips: List[str] = Field(default_factory=list)
    activity_tips: List[str] = Field(default_factory=list)


class MedicalAwareness(BaseModel):
    """Escalation advice shown with every result"""

    escalation_advice: List[str] = Field(default_factory=list)
    warning_signs_to_watch: List[str] = Field(default_factory=list)
    when_to_seek_help: List[str] = Field(default_factory=list)


class NextStepsOptions(BaseModel):
    """
    What the user may do next.

    lifestyle_only_enabled is never gated. medicines_enabled mirrors the
    confirmation gate's can_enable_medicines.
    """

    lifestyle_only_enabled: Literal[True] = True
    medicines_enabled: bool
    medicines_disabled_reason: Optional[str] = None
    consult_doctor_enabled: bool = True

    @model_validator(mode='after')
    def reason_when_disabled(self):
        if not self.medicines_enabled and not self.medicines_disabled_reason:
            raise ValueError("medicines_disabled_reason is required when medicines are disabled")
        return self


# ============================================================
# Doctor Review
# ============================================================

class LifestyleSummary(BaseModel):
    sleep_quality: SleepQuality
    stress_level: StressLevel
    activity_level: ActivityLevel


class DoctorCaseFile(BaseModel):
    """Everything a practitioner needs to review the case"""

    symptoms: SymptomInput
    lifestyle: LifestyleSummary
    advanced_inputs: Optional[AdvancedInputs] = None
    ai_confidence_before: int = Field(ge=0, le=100)
    ai_confidence_after: Optional[int] = Field(default=None, ge=0, le=100)
    dosha_analysis: ConstitutionalAssessment


class DoctorDecisionType(str, Enum):
    APPROVED = "approved"
    MODIFIED = "modified"
    REJECTED = "rejected"


class DoctorDecision(BaseModel):
    decision: DoctorDecisionType
    approved_medicines: List[str] = Field(default_factory=list)
    modified_medicines: List[str] = Field(default_factory=list)
    rejection_reason: Optional[str] = Field(default=None, max_length=1000)
    consultation_required: bool = False
    doctor_notes: Optional[str] = Field(default=None, max_length=2000)
    decided_at: datetime = Field(default_factory=utc_now)

    @model_validator(mode='after')
    def rejection_needs_reason(self):
        if self.decision == DoctorDecisionType.REJECTED and not self.rejection_reason:
            raise ValueError("rejection_reason is required when the decision is rejected")
        return self


# ============================================================
# Feedback
# ============================================================

class UserFeedback(BaseModel):
    """Terminal feedback. Kept for future model retraining."""

    feedback_id: str = Field(default_factory=lambda: f"fb_{uuid4().hex[:12]}")
    case_id: str
    was_helpful: bool
    symptoms_improved: Optional[bool] = None
    side_effects: Optional[str] = Field(default=None, max_length=2000)
    additional_comments: Optional[str] = Field(default=None, max_length=2000)
    created_at: datetime = Field(default_factory=utc_now)


# ============================================================
# Core Case Model
# ============================================================

class Case(BaseModel):
    """
    Root case entity.
    Represents one user's health check from intake to outcome.
    """

    # ============================================================
    # Core Identity
    # ============================================================
    case_id: str = Field(
        default_factory=lambda: f"case_{uuid4().hex[:12]}",
        description="Opaque case identifier, stable for the lifetime of the case",
        pattern=r"^case_[a-f0-9]{12}$"
    )

    status: CaseStatus = Field(default=CaseStatus.CONTEXT_COLLECTED)

    status_history: List[CaseStatusTransition] = Field(default_factory=list)

    # ============================================================
    # Inputs
    # ============================================================
    user_context: UserContext

    symptom_input: Optional[SymptomInput] = None

    advanced_inputs: Optional[AdvancedInputs] = None

    # ============================================================
    # Derived Results
    # ============================================================
    diagnosis_result: Optional[DiagnosisResult] = None

    confirmation_gate: Optional[ConfirmationGateResult] = None

    health_snapshot: Optional[HealthSnapshot] = None

    preventive_guidance: Optional[PreventiveGuidance] = None

    medical_awareness: Optional[MedicalAwareness] = None

    next_steps_options: Optional[NextStepsOptions] = None

    # ============================================================
    # Outcome
    # ============================================================
    doctor_case_file: Optional[DoctorCaseFile] = None

    doctor_decision: Optional[DoctorDecision] = None

    feedback: Optional[UserFeedback] = None

    # ============================================================
    # Timestamps
    # ============================================================
    created_at: datetime = Field(default_factory=utc_now)

    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal

    @model_validator(mode='after')
    def validate_timestamp_ordering(self) -> 'Case':
        if self.created_at > self.updated_at:
            raise ValueError(
                f"created_at ({self.created_at}) cannot be after updated_at ({self.updated_at})"
            )
        return self

    @model_validator(mode='after')
    def validate_derived_fields(self) -> 'Case':
        """Derived results travel together; medicines never outrun the gate."""
        if self.diagnosis_result is not None and self.next_steps_options is None:
            raise ValueError("A case with a diagnosis result must carry next steps options")
        if self.next_steps_options is not None and self.confirmation_gate is not None:
            if self.next_steps_options.medicines_enabled and not self.confirmation_gate.can_enable_medicines:
                raise ValueError("medicines_enabled cannot exceed the confirmation gate decision")
        return self
