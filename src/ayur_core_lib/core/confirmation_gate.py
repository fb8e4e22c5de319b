"""
Diagnostic Confirmation Gate - safety checkpoint before medicine recommendations.

The gate fires when any of these hold (each adds its own reason):
  - two or more possible conditions
  - confidence score below 60
  - three or more overlapping symptom clusters
  - the user's goal is current discomfort

A fired gate asks for evidence matched to the symptoms: skin image for skin
symptoms, tongue image for digestive symptoms, doctor consultation when risk is
high, and a face image when nothing more specific applies.
"""

import logging
from typing import Callable, Dict, Iterable, List, Optional

from ayur_core_lib.catalog.symptoms import SymptomCatalog, default_catalog
from ayur_core_lib.models.assessment import (
    AdvancedInputType,
    ConfirmationGateResult,
    RiskAssessment,
)
from ayur_core_lib.models.case import AdvancedInputs
from ayur_core_lib.models.common import PrimaryGoal, RiskLevel

logger = logging.getLogger(__name__)

REASON_MULTIPLE_CONDITIONS = "Symptoms match multiple conditions"
REASON_LOW_CONFIDENCE = "AI confidence score is low"
REASON_OVERLAPPING_PATTERNS = "Overlapping symptom patterns detected"
REASON_CURRENT_DISCOMFORT = "Current discomfort requires additional verification"

LOW_CONFIDENCE_THRESHOLD = 60
MULTIPLE_CONDITIONS_COUNT = 2
OVERLAPPING_CLUSTER_COUNT = 3

# Evidence checks per required input. Tags without an entry here are
# satisfied by any evidence at all (see apply_advanced_inputs).
EVIDENCE_CHECKS: Dict[AdvancedInputType, Callable[[AdvancedInputs], bool]] = {
    AdvancedInputType.SKIN_IMAGE: lambda ev: bool(ev.skin_image_ref),
    AdvancedInputType.TONGUE_IMAGE: lambda ev: bool(ev.tongue_image_ref),
    AdvancedInputType.DOCTOR_CONSULTATION: lambda ev: bool(ev.doctor_consultation_completed),
}


def trigger_reasons(risk: RiskAssessment, primary_goal: PrimaryGoal) -> List[str]:
    reasons: List[str] = []
    if len(risk.possible_conditions) >= MULTIPLE_CONDITIONS_COUNT:
        reasons.append(REASON_MULTIPLE_CONDITIONS)
    if risk.confidence_score < LOW_CONFIDENCE_THRESHOLD:
        reasons.append(REASON_LOW_CONFIDENCE)
    if len(risk.symptom_clusters) >= OVERLAPPING_CLUSTER_COUNT:
        reasons.append(REASON_OVERLAPPING_PATTERNS)
    if primary_goal == PrimaryGoal.CURRENT_DISCOMFORT:
        reasons.append(REASON_CURRENT_DISCOMFORT)
    return reasons


def required_inputs_for(
    symptom_ids: List[int],
    risk: RiskAssessment,
    catalog: SymptomCatalog,
) -> List[AdvancedInputType]:
    required: List[AdvancedInputType] = []
    if any(catalog.is_skin_symptom(i) for i in symptom_ids):
        required.append(AdvancedInputType.SKIN_IMAGE)
    if any(catalog.is_digestive_symptom(i) for i in symptom_ids):
        required.append(AdvancedInputType.TONGUE_IMAGE)
    if risk.risk_level == RiskLevel.HIGH:
        required.append(AdvancedInputType.DOCTOR_CONSULTATION)
    if not required:
        required.append(AdvancedInputType.FACE_IMAGE)
    return required


def evaluate_gate(
    symptom_ids: Iterable[int],
    risk: RiskAssessment,
    primary_goal: PrimaryGoal,
    catalog: Optional[SymptomCatalog] = None,
) -> ConfirmationGateResult:
    """Decide whether extra verification is needed before medicines unlock."""
    catalog = catalog or default_catalog
    selected = list(symptom_ids)

    reasons = trigger_reasons(risk, primary_goal)
    triggered = bool(reasons)
    required = required_inputs_for(selected, risk, catalog) if triggered else []

    if triggered:
        logger.info(
            f"Confirmation gate triggered: reasons={reasons} "
            f"required={[r.value for r in required]}"
        )

    return ConfirmationGateResult(
        triggered=triggered,
        trigger_reasons=reasons,
        required_inputs=required,
        inputs_provided=False,
        can_proceed=not triggered,
        can_enable_medicines=not triggered,
    )


def is_requirement_met(requirement: AdvancedInputType, evidence: AdvancedInputs) -> bool:
    check = EVIDENCE_CHECKS.get(requirement)
    if check is None:
        # No dedicated field check for this tag: any submitted evidence counts.
        return evidence.has_any_evidence
    return check(evidence)


def apply_advanced_inputs(
    gate: ConfirmationGateResult,
    evidence: AdvancedInputs,
) -> ConfirmationGateResult:
    """
    Re-evaluate a gate after the user submits evidence.

    triggered, trigger_reasons and required_inputs carry over unchanged.
    """
    missing = [r for r in gate.required_inputs if not is_requirement_met(r, evidence)]
    inputs_provided = not missing

    if missing:
        logger.info(f"Advanced inputs incomplete: missing={[m.value for m in missing]}")

    return ConfirmationGateResult(
        triggered=gate.triggered,
        trigger_reasons=list(gate.trigger_reasons),
        required_inputs=list(gate.required_inputs),
        inputs_provided=inputs_provided,
        can_proceed=inputs_provided,
        can_enable_medicines=inputs_provided,
    )
