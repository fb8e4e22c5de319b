"""
Data models for the assessment engine.

common must load first: the catalog package depends on DoshaType only, and
api_models pulls in the catalog for the disclaimer text.
"""

from ayur_core_lib.models.common import (
    DoshaType,
    DOSHA_PRIORITY,
    AgeRange,
    Gender,
    CityTier,
    SleepQuality,
    StressLevel,
    ActivityLevel,
    PrimaryGoal,
    ImbalanceLevel,
    RiskLevel,
    utc_now,
    utc_timestamp,
    parse_utc_timestamp,
)

from ayur_core_lib.models.assessment import (
    DoshaBalance,
    ConstitutionalAssessment,
    PossibleCondition,
    RiskAssessment,
    AdvancedInputType,
    ConfirmationGateResult,
    DiagnosisResult,
)

from ayur_core_lib.models.case import (
    # Core case model
    Case,
    CaseStatus,
    CaseStatusTransition,

    # Inputs
    UserContext,
    SymptomInput,
    AdvancedInputs,

    # User-facing output
    DoshaImbalance,
    HealthSnapshot,
    PreventiveGuidance,
    MedicalAwareness,
    NextStepsOptions,

    # Doctor review and feedback
    LifestyleSummary,
    DoctorCaseFile,
    DoctorDecisionType,
    DoctorDecision,
    UserFeedback,
)

from ayur_core_lib.models.api_models import (
    CaseCreateRequest,
    SubmitSymptomsRequest,
    SubmitAdvancedInputsRequest,
    FeedbackRequest,
    DoctorReviewRequest,
    DoctorDecisionRequest,
    CaseResponse,
    SymptomCount,
    DoshaPatternCounts,
    DropOffPoint,
    AdminStats,
)

__all__ = [
    # Common
    "DoshaType", "DOSHA_PRIORITY", "AgeRange", "Gender", "CityTier",
    "SleepQuality", "StressLevel", "ActivityLevel", "PrimaryGoal",
    "ImbalanceLevel", "RiskLevel",
    "utc_now", "utc_timestamp", "parse_utc_timestamp",

    # Assessment
    "DoshaBalance", "ConstitutionalAssessment", "PossibleCondition",
    "RiskAssessment", "AdvancedInputType", "ConfirmationGateResult",
    "DiagnosisResult",

    # Case
    "Case", "CaseStatus", "CaseStatusTransition",
    "UserContext", "SymptomInput", "AdvancedInputs",
    "DoshaImbalance", "HealthSnapshot", "PreventiveGuidance",
    "MedicalAwareness", "NextStepsOptions",
    "LifestyleSummary", "DoctorCaseFile", "DoctorDecisionType",
    "DoctorDecision", "UserFeedback",

    # API
    "CaseCreateRequest", "SubmitSymptomsRequest", "SubmitAdvancedInputsRequest",
    "FeedbackRequest", "DoctorReviewRequest", "DoctorDecisionRequest",
    "CaseResponse", "SymptomCount", "DoshaPatternCounts", "DropOffPoint",
    "AdminStats",
]
