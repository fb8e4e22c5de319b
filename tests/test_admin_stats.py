"""
Tests for admin dashboard aggregation.
"""
from ayur_core_lib.core.admin_stats import compute_admin_stats
from ayur_core_lib.models.case import Case, SymptomInput

from conftest import make_context


def case_with(*ids):
    return Case(
        user_context=make_context(),
        symptom_input=SymptomInput(selected_symptom_ids=list(ids)) if ids else None,
    )


class TestComputeAdminStats:

    def test_empty(self):
        stats = compute_admin_stats([], {})
        assert stats.user_count == 0
        assert stats.common_symptoms == []
        assert stats.dosha_patterns.vata == 0
        assert stats.advanced_input_triggers == 0

    def test_common_symptoms_are_ranked_and_capped(self):
        cases = [case_with(*range(1, 13)), case_with(5, 6), case_with(6)]
        stats = compute_admin_stats(cases, {})

        ranked = [(s.symptom, s.count) for s in stats.common_symptoms]
        assert len(ranked) == 10
        assert ranked[0] == ("symptom_6", 3)
        assert ranked[1] == ("symptom_5", 2)
        # equal counts keep first-seen order
        assert ranked[2] == ("symptom_1", 1)

    def test_drop_off_percentages_round_half_up(self):
        cases = [case_with() for _ in range(8)]
        counters = {"drop_off:intake": 1, "drop_off:results": 3, "safety_flag": 4}
        stats = compute_admin_stats(cases, counters)

        assert [(d.stage, d.percentage) for d in stats.drop_off_points] == [
            ("intake", 13),
            ("results", 38),
        ]
        assert stats.safety_flags == 4

    def test_drop_off_without_cases_uses_unit_divisor(self):
        stats = compute_admin_stats([], {"drop_off:intake": 2})
        assert stats.drop_off_points[0].percentage == 200
