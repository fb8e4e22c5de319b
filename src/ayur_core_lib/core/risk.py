"""
Risk (Medical) Scorer - deterministic, transparent confidence and risk scoring.

Heuristic stand-in for a future statistical model. No randomness, no I/O.

Confidence, keyed by number of selected symptoms:
  0 → 30, 1 → 50, 2 → 75, 3-4 → 78, 5+ → 85
  - 15 when three or more clusters overlap
  clamped to 0–100

Risk level:
  low → medium   if 5+ symptoms or any severe symptom
      → high     if 2+ red flags, or current discomfort with 4+ symptoms

Possible conditions are emitted for the skin and digestive clusters only.
The mental and physical clusters produce none; whether they should
is an open product question, so results stay compatible for now.
"""

import logging
from typing import Iterable, List, Optional

from ayur_core_lib.catalog.symptoms import (
    FATIGUE_SYMPTOM_ID,
    MENTAL_SYMPTOM_IDS,
    PHYSICAL_SYMPTOM_IDS,
    SEVERE_SYMPTOM_IDS,
    SymptomCatalog,
    default_catalog,
)
from ayur_core_lib.models.assessment import PossibleCondition, RiskAssessment
from ayur_core_lib.models.common import PrimaryGoal, RiskLevel

logger = logging.getLogger(__name__)

CLUSTER_DERMATOLOGICAL = "Dermatological"
CLUSTER_GASTROINTESTINAL = "Gastrointestinal"
CLUSTER_MENTAL = "Mental/Emotional"
CLUSTER_SYSTEMIC = "Musculoskeletal/Systemic"

RED_FLAG_MULTIPLE_SEVERE = "Multiple symptoms with potential severity - monitoring recommended"
RED_FLAG_PERSISTENT_FATIGUE = "Persistent fatigue may warrant professional evaluation if ongoing"

OVERLAP_CLUSTER_COUNT = 3
OVERLAP_PENALTY = 15
CONDITION_BASE_CONFIDENCE = 60
CONDITION_CONFIDENCE_STEP = 10


def base_confidence(selected_count: int) -> int:
    if selected_count == 0:
        return 30
    if selected_count == 1:
        return 50
    if selected_count >= 5:
        return 85
    if selected_count >= 3:
        return 78
    return 75


def detect_clusters(symptom_ids: List[int], catalog: SymptomCatalog) -> List[str]:
    """Cluster labels in fixed order: skin, digestive, mental, physical."""
    clusters: List[str] = []
    if any(catalog.is_skin_symptom(i) for i in symptom_ids):
        clusters.append(CLUSTER_DERMATOLOGICAL)
    if any(catalog.is_digestive_symptom(i) for i in symptom_ids):
        clusters.append(CLUSTER_GASTROINTESTINAL)
    if any(i in MENTAL_SYMPTOM_IDS for i in symptom_ids):
        clusters.append(CLUSTER_MENTAL)
    if any(i in PHYSICAL_SYMPTOM_IDS for i in symptom_ids):
        clusters.append(CLUSTER_SYSTEMIC)
    return clusters


def detect_red_flags(symptom_ids: List[int]) -> List[str]:
    flags: List[str] = []
    has_severe = any(i in SEVERE_SYMPTOM_IDS for i in symptom_ids)
    if has_severe and len(symptom_ids) >= 3:
        flags.append(RED_FLAG_MULTIPLE_SEVERE)
    if FATIGUE_SYMPTOM_ID in symptom_ids:
        flags.append(RED_FLAG_PERSISTENT_FATIGUE)
    return flags


def stratify_risk(
    symptom_ids: List[int],
    red_flags: List[str],
    primary_goal: PrimaryGoal,
) -> RiskLevel:
    level = RiskLevel.LOW
    if len(symptom_ids) >= 5 or any(i in SEVERE_SYMPTOM_IDS for i in symptom_ids):
        level = RiskLevel.MEDIUM
    if len(red_flags) >= 2 or (
        primary_goal == PrimaryGoal.CURRENT_DISCOMFORT and len(symptom_ids) >= 4
    ):
        level = RiskLevel.HIGH
    return level


def _condition_confidence(matching: int) -> int:
    return min(100, CONDITION_BASE_CONFIDENCE + CONDITION_CONFIDENCE_STEP * matching)


def possible_conditions(symptom_ids: List[int], catalog: SymptomCatalog) -> List[PossibleCondition]:
    conditions: List[PossibleCondition] = []

    skin_count = sum(1 for i in symptom_ids if catalog.is_skin_symptom(i))
    if skin_count:
        conditions.append(PossibleCondition(
            name="Skin sensitivity pattern",
            confidence=_condition_confidence(skin_count),
            category=CLUSTER_DERMATOLOGICAL,
        ))

    digestive_count = sum(1 for i in symptom_ids if catalog.is_digestive_symptom(i))
    if digestive_count:
        conditions.append(PossibleCondition(
            name="Digestive imbalance pattern",
            confidence=_condition_confidence(digestive_count),
            category=CLUSTER_GASTROINTESTINAL,
        ))

    return conditions


def assess_risk(
    symptom_ids: Iterable[int],
    free_text: Optional[str],
    primary_goal: PrimaryGoal,
    catalog: Optional[SymptomCatalog] = None,
) -> RiskAssessment:
    """
    Compute clusters, confidence, red flags and risk level.

    free_text is accepted for interface stability; current rules ignore it.
    """
    catalog = catalog or default_catalog
    selected = list(symptom_ids)

    clusters = detect_clusters(selected, catalog)

    confidence = base_confidence(len(selected))
    if len(clusters) >= OVERLAP_CLUSTER_COUNT:
        confidence -= OVERLAP_PENALTY
    confidence = max(0, min(100, confidence))

    red_flags = detect_red_flags(selected)
    risk_level = stratify_risk(selected, red_flags, primary_goal)

    assessment = RiskAssessment(
        symptom_clusters=clusters,
        possible_conditions=possible_conditions(selected, catalog),
        confidence_score=confidence,
        risk_level=risk_level,
        red_flags=red_flags,
        referral_recommended=risk_level == RiskLevel.HIGH,
    )

    logger.debug(
        f"Risk assessment: clusters={clusters} confidence={confidence} "
        f"risk={risk_level.value} red_flags={len(red_flags)}"
    )
    return assessment
