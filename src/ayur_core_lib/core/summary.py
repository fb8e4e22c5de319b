"""User-facing output builders: summary text, snapshot, guidance, next steps.

All functions here are pure over their arguments.
"""

from typing import Optional

from ayur_core_lib.catalog.guidance import (
    GUIDANCE_SLICE_SIZES,
    MEDICAL_AWARENESS,
    GuidanceTable,
    default_guidance,
)
from ayur_core_lib.models.assessment import (
    ConfirmationGateResult,
    ConstitutionalAssessment,
    RiskAssessment,
)
from ayur_core_lib.models.case import (
    DoshaImbalance,
    HealthSnapshot,
    MedicalAwareness,
    NextStepsOptions,
    PreventiveGuidance,
)
from ayur_core_lib.models.common import RiskLevel

MEDICINES_GATED_REASON = "Additional verification required before medicine recommendations"
MEDICINES_MISSING_INPUTS_REASON = "Required verification inputs not provided"

RISK_CLOSING_SENTENCES = {
    RiskLevel.LOW: "This is generally manageable with lifestyle and dietary adjustments.",
    RiskLevel.MEDIUM: "Consider monitoring your symptoms and making gradual lifestyle changes.",
    RiskLevel.HIGH: "We recommend consulting with a healthcare practitioner for personalized guidance.",
}

PATTERN_CONSISTENT_SCORE = 80
PATTERN_INCONSISTENT_SCORE = 60


def generate_summary(constitutional: ConstitutionalAssessment, risk: RiskAssessment) -> str:
    vikriti = constitutional.vikriti.display_name
    summary = (
        f"Based on your symptoms, you appear to have a "
        f"{constitutional.imbalance_level.value} {vikriti} imbalance. "
    )
    if constitutional.prakriti != constitutional.vikriti:
        summary += (
            f"Your natural constitution (Prakriti) appears to be "
            f"{constitutional.prakriti.display_name}, but current factors have shifted your balance. "
        )
    return summary + RISK_CLOSING_SENTENCES[risk.risk_level]


def overall_confidence(constitutional: ConstitutionalAssessment, risk: RiskAssessment) -> int:
    pattern_score = (
        PATTERN_CONSISTENT_SCORE if constitutional.pattern_consistent else PATTERN_INCONSISTENT_SCORE
    )
    # confidence_score and pattern_score are ints, so the mean is a whole or .5 value
    total = risk.confidence_score + pattern_score
    return total // 2 + total % 2


def build_health_snapshot(
    constitutional: ConstitutionalAssessment,
    risk: RiskAssessment,
) -> HealthSnapshot:
    return HealthSnapshot(
        summary=generate_summary(constitutional, risk),
        dosha_imbalance=DoshaImbalance(
            primary=constitutional.vikriti,
            level=constitutional.imbalance_level,
        ),
        dosha_visualization=constitutional.dosha_balance,
    )


def build_preventive_guidance(
    constitutional: ConstitutionalAssessment,
    guidance: Optional[GuidanceTable] = None,
) -> PreventiveGuidance:
    sections = (guidance or default_guidance).by_type(constitutional.vikriti.value)
    return PreventiveGuidance(**{
        section: list(sections[section][:size])
        for section, size in GUIDANCE_SLICE_SIZES.items()
    })


def build_medical_awareness() -> MedicalAwareness:
    return MedicalAwareness(**MEDICAL_AWARENESS)


def build_next_steps(
    gate: ConfirmationGateResult,
    disabled_reason: str = MEDICINES_GATED_REASON,
) -> NextStepsOptions:
    """Lifestyle guidance is never gated; medicines follow the gate."""
    enabled = gate.can_enable_medicines
    return NextStepsOptions(
        lifestyle_only_enabled=True,
        medicines_enabled=enabled,
        medicines_disabled_reason=None if enabled else disabled_reason,
        consult_doctor_enabled=True,
    )
