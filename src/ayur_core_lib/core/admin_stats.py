"""Admin dashboard aggregation over stored cases and analytics counters."""

from collections import Counter
from typing import Dict, Iterable, List

from ayur_core_lib.analytics.counters import (
    ADVANCED_INPUT_TRIGGER,
    DROP_OFF_PREFIX,
    SAFETY_FLAG,
)
from ayur_core_lib.models.api_models import (
    AdminStats,
    DoshaPatternCounts,
    DropOffPoint,
    SymptomCount,
)
from ayur_core_lib.models.case import Case

TOP_SYMPTOM_LIMIT = 10


def _percentage(count: int, total: int) -> int:
    # round half up on count / total * 100, integers only
    return (count * 200 + total) // (2 * total)


def compute_admin_stats(cases: Iterable[Case], counters: Dict[str, int]) -> AdminStats:
    """
    Build dashboard statistics.

    Args:
        cases: Every stored case
        counters: Analytics counter snapshot (name -> count)

    Drop-off percentages are relative to the number of cases; with no cases
    the divisor is 1.
    """
    cases = list(cases)

    symptom_counts: Counter = Counter()
    for case in cases:
        if case.symptom_input is None:
            continue
        for symptom_id in case.symptom_input.selected_symptom_ids:
            symptom_counts[f"symptom_{symptom_id}"] += 1

    # Counter.most_common keeps first-seen order among equal counts
    common = [
        SymptomCount(symptom=name, count=count)
        for name, count in symptom_counts.most_common(TOP_SYMPTOM_LIMIT)
    ]

    patterns: Dict[str, int] = {"vata": 0, "pitta": 0, "kapha": 0}
    for case in cases:
        if case.diagnosis_result is not None:
            patterns[case.diagnosis_result.constitutional.prakriti.value] += 1

    total = len(cases) or 1
    drop_offs: List[DropOffPoint] = [
        DropOffPoint(
            stage=name[len(DROP_OFF_PREFIX):],
            count=count,
            percentage=_percentage(count, total),
        )
        for name, count in counters.items()
        if name.startswith(DROP_OFF_PREFIX)
    ]

    return AdminStats(
        user_count=len(cases),
        common_symptoms=common,
        dosha_patterns=DoshaPatternCounts(**patterns),
        drop_off_points=drop_offs,
        advanced_input_triggers=counters.get(ADVANCED_INPUT_TRIGGER, 0),
        safety_flags=counters.get(SAFETY_FLAG, 0),
    )
