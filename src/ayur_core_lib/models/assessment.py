"""Assessment data models - dual scoring and confirmation gate.

Key Models:
- ConstitutionalAssessment: dosha imbalance profile (prakriti / vikriti)
- RiskAssessment: heuristic clinical risk and confidence profile
- ConfirmationGateResult: safety checkpoint gating medicine recommendations
- DiagnosisResult: both assessments bundled with an overall confidence

All assessments are derived values. They are recomputed from scratch whenever
the symptom selection changes and are never edited in place.
"""

from enum import Enum
from typing import List

from pydantic import BaseModel, Field, model_validator

from ayur_core_lib.models.common import DoshaType, ImbalanceLevel, RiskLevel


# ============================================================
# Constitutional (Ayurvedic) Assessment
# ============================================================

class DoshaBalance(BaseModel):
    """Display percentages for the three doshas. Always sums to exactly 100."""

    vata: int = Field(ge=0, le=100)
    pitta: int = Field(ge=0, le=100)
    kapha: int = Field(ge=0, le=100)

    @model_validator(mode='after')
    def total_is_one_hundred(self):
        total = self.vata + self.pitta + self.kapha
        if total != 100:
            raise ValueError(f"dosha balance must sum to 100, got {total}")
        return self

    def share_of(self, dosha: DoshaType) -> int:
        return getattr(self, dosha.value)

    class Config:
        frozen = True


class ConstitutionalAssessment(BaseModel):
    """
    Rule-based constitutional imbalance profile.

    prakriti is a coarse lifestyle heuristic, not a validated prakriti
    instrument. vikriti comes from symptom tallies only.
    """

    prakriti: DoshaType = Field(
        description="Baseline constitution estimated from lifestyle answers"
    )

    vikriti: DoshaType = Field(
        description="Currently dominant imbalance estimated from selected symptoms"
    )

    imbalance_level: ImbalanceLevel = Field(
        description="mild (<2 matching symptoms) | moderate (2-3) | significant (4+)"
    )

    dosha_balance: DoshaBalance = Field(
        description="Per-dosha display percentages"
    )

    pattern_consistent: bool = Field(
        description="vikriti matches prakriti, or the symptom signal is strong enough to stand alone"
    )

    class Config:
        frozen = True


# ============================================================
# Risk (Medical) Assessment
# ============================================================

class PossibleCondition(BaseModel):
    """Educational pattern match. Never a diagnosis."""

    name: str = Field(min_length=1)
    confidence: int = Field(ge=0, le=100)
    category: str = Field(description="Cluster label the pattern belongs to")

    class Config:
        frozen = True


class RiskAssessment(BaseModel):
    """
    Heuristic risk and confidence profile.

    Stand-in for a future statistical model. Deterministic and auditable:
    identical inputs always produce an identical assessment.
    """

    symptom_clusters: List[str] = Field(
        default_factory=list,
        description="Cluster labels present, in fixed display order"
    )

    possible_conditions: List[PossibleCondition] = Field(
        default_factory=list,
        description="Generic pattern names (skin and digestive clusters only)"
    )

    confidence_score: int = Field(ge=0, le=100)

    risk_level: RiskLevel

    red_flags: List[str] = Field(
        default_factory=list,
        description="Advisory warnings; free text, not structured codes"
    )

    referral_recommended: bool = Field(
        description="True exactly when risk_level is HIGH"
    )

    @model_validator(mode='after')
    def referral_matches_risk(self):
        if self.referral_recommended != (self.risk_level == RiskLevel.HIGH):
            raise ValueError("referral_recommended must be True exactly when risk_level is high")
        return self

    class Config:
        frozen = True


# ============================================================
# Confirmation Gate
# ============================================================

class AdvancedInputType(str, Enum):
    """Evidence the gate may ask for before unlocking medicines"""

    SKIN_IMAGE = "skin_image"
    """Photo of the affected skin area (any skin-category symptom)"""

    TONGUE_IMAGE = "tongue_image"
    """Tongue photo for digestive / metabolic symptoms"""

    FACE_IMAGE = "face_image"
    """Fallback when no category-specific evidence applies"""

    DOCTOR_CONSULTATION = "doctor_consultation"
    """Completed consultation; required whenever risk is high"""

    PULSE_READING = "pulse_reading"
    """Practitioner-assisted reading. Never requested by the current rule set."""


class ConfirmationGateResult(BaseModel):
    """
    Outcome of the diagnostic confirmation gate.

    triggered and required_inputs are fixed when symptoms are scored. Only the
    advanced-input submission changes inputs_provided, can_proceed and
    can_enable_medicines afterwards.
    """

    triggered: bool

    trigger_reasons: List[str] = Field(default_factory=list)

    required_inputs: List[AdvancedInputType] = Field(
        default_factory=list,
        description="Evidence types to collect, in display order"
    )

    inputs_provided: bool = Field(
        default=False,
        description="All required evidence has been supplied"
    )

    can_proceed: bool

    can_enable_medicines: bool

    @model_validator(mode='after')
    def gate_is_safe(self):
        """A triggered gate must ask for something and must not unlock medicines early."""
        if self.triggered and not self.required_inputs:
            raise ValueError("A triggered gate must list at least one required input")
        if self.can_enable_medicines and self.triggered and not self.inputs_provided:
            raise ValueError("Medicines cannot be enabled while required inputs are missing")
        return self

    class Config:
        frozen = True


# ============================================================
# Combined Result
# ============================================================

class DiagnosisResult(BaseModel):
    """Both assessments plus a blended confidence. Not a medical diagnosis."""

    constitutional: ConstitutionalAssessment

    risk: RiskAssessment

    overall_confidence: int = Field(
        ge=0,
        le=100,
        description="Mean of the risk confidence and a pattern-consistency score (80 or 60)"
    )

    is_finalized: bool = Field(
        description="False while the confirmation gate is waiting on evidence"
    )

    class Config:
        frozen = True
