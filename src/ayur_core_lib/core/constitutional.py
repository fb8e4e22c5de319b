"""
Constitutional (Ayurvedic) Scorer - deterministic dosha imbalance profile.

Rules:
  vikriti     = dosha with the highest symptom tally (ties: vata > pitta > kapha;
                all-zero defaults to vata)
  prakriti    = lifestyle heuristic, independent of symptoms:
                  active and not low stress       → pitta
                  sedentary and not poor sleep    → kapha
                  otherwise                       → vata
  balance     = tally / max(selected, 1) as a percentage, half-up rounded;
                a zero share shows as 33/33/34; the remainder after rounding
                goes to vikriti so the three values sum to exactly 100
  imbalance   = significant (max tally ≥ 4) | moderate (≥ 2) | mild
  consistent  = vikriti == prakriti or max tally ≥ 2

The prakriti rule is a coarse placeholder, not a validated constitution quiz.
"""

import logging
import math
from typing import Dict, Iterable, Optional

from ayur_core_lib.catalog.symptoms import SymptomCatalog, default_catalog
from ayur_core_lib.models.assessment import ConstitutionalAssessment, DoshaBalance
from ayur_core_lib.models.common import (
    DOSHA_PRIORITY,
    ActivityLevel,
    DoshaType,
    ImbalanceLevel,
    SleepQuality,
    StressLevel,
)

logger = logging.getLogger(__name__)

# Shown instead of 0% for a dosha with no matching symptoms
MINIMUM_DISPLAY_SHARE: Dict[DoshaType, int] = {
    DoshaType.VATA: 33,
    DoshaType.PITTA: 33,
    DoshaType.KAPHA: 34,
}

SIGNIFICANT_TALLY = 4
MODERATE_TALLY = 2
CONSISTENT_TALLY = 2


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def tally_doshas(symptom_ids: Iterable[int], catalog: SymptomCatalog) -> Dict[DoshaType, int]:
    """Count selected symptoms per related dosha; unknown or untyped ids are skipped."""
    counts = {dosha: 0 for dosha in DOSHA_PRIORITY}
    for symptom_id in symptom_ids:
        symptom = catalog.by_id(symptom_id)
        if symptom is not None and symptom.related_dosha is not None:
            counts[symptom.related_dosha] += 1
    return counts


def dominant_dosha(counts: Dict[DoshaType, int]) -> DoshaType:
    """Highest tally wins; DOSHA_PRIORITY order breaks ties."""
    # sorted() is stable, so equal tallies keep DOSHA_PRIORITY order
    ranked = sorted(DOSHA_PRIORITY, key=lambda dosha: counts[dosha], reverse=True)
    top = ranked[0]
    return top if counts[top] > 0 else DoshaType.VATA


def estimate_prakriti(
    sleep_quality: SleepQuality,
    stress_level: StressLevel,
    activity_level: ActivityLevel,
) -> DoshaType:
    if activity_level == ActivityLevel.ACTIVE and stress_level != StressLevel.LOW:
        return DoshaType.PITTA
    if activity_level == ActivityLevel.SEDENTARY and sleep_quality != SleepQuality.POOR:
        return DoshaType.KAPHA
    return DoshaType.VATA


def compute_dosha_balance(
    counts: Dict[DoshaType, int],
    selected_count: int,
    vikriti: DoshaType,
) -> DoshaBalance:
    total = max(selected_count, 1)
    shares: Dict[DoshaType, int] = {}
    for dosha in DOSHA_PRIORITY:
        share = _round_half_up(counts[dosha] / total * 100)
        shares[dosha] = share or MINIMUM_DISPLAY_SHARE[dosha]

    remainder = 100 - sum(shares.values())
    if remainder:
        shares[vikriti] += remainder

    return DoshaBalance(
        vata=shares[DoshaType.VATA],
        pitta=shares[DoshaType.PITTA],
        kapha=shares[DoshaType.KAPHA],
    )


def imbalance_level_for(max_tally: int) -> ImbalanceLevel:
    if max_tally >= SIGNIFICANT_TALLY:
        return ImbalanceLevel.SIGNIFICANT
    if max_tally >= MODERATE_TALLY:
        return ImbalanceLevel.MODERATE
    return ImbalanceLevel.MILD


def assess_constitution(
    symptom_ids: Iterable[int],
    sleep_quality: SleepQuality,
    stress_level: StressLevel,
    activity_level: ActivityLevel,
    catalog: Optional[SymptomCatalog] = None,
) -> ConstitutionalAssessment:
    """
    Compute the constitutional imbalance profile.

    An empty selection is not an error: it yields vata / mild / 33-33-34.
    """
    catalog = catalog or default_catalog
    selected = list(symptom_ids)

    counts = tally_doshas(selected, catalog)
    vikriti = dominant_dosha(counts)
    prakriti = estimate_prakriti(sleep_quality, stress_level, activity_level)
    max_tally = max(counts.values())

    assessment = ConstitutionalAssessment(
        prakriti=prakriti,
        vikriti=vikriti,
        imbalance_level=imbalance_level_for(max_tally),
        dosha_balance=compute_dosha_balance(counts, len(selected), vikriti),
        pattern_consistent=vikriti == prakriti or max_tally >= CONSISTENT_TALLY,
    )

    tallies = {dosha.value: count for dosha, count in counts.items()}
    logger.debug(
        f"Constitutional assessment: tallies={tallies} "
        f"vikriti={vikriti.value} prakriti={prakriti.value} level={assessment.imbalance_level.value}"
    )
    return assessment
