"""
Tests for the constitutional (dosha) scorer.
"""
import itertools

import pytest

from ayur_core_lib.core.constitutional import (
    assess_constitution,
    dominant_dosha,
    estimate_prakriti,
    imbalance_level_for,
)
from ayur_core_lib.models.common import (
    ActivityLevel,
    DoshaType,
    ImbalanceLevel,
    SleepQuality,
    StressLevel,
)

DEFAULT_LIFESTYLE = (SleepQuality.GOOD, StressLevel.MODERATE, ActivityLevel.LIGHT)


def assess(ids, lifestyle=DEFAULT_LIFESTYLE):
    return assess_constitution(ids, *lifestyle)


class TestVikriti:
    """Dominant dosha from symptom tallies."""

    def test_single_pitta_symptom(self):
        result = assess([10])
        assert result.vikriti == DoshaType.PITTA
        assert result.imbalance_level == ImbalanceLevel.MILD

    def test_ties_break_vata_then_pitta_then_kapha(self):
        assert assess([1, 9]).vikriti == DoshaType.VATA
        assert assess([9, 17]).vikriti == DoshaType.PITTA
        assert assess([17, 1, 9]).vikriti == DoshaType.VATA

    def test_all_zero_tallies_default_to_vata(self):
        counts = {DoshaType.VATA: 0, DoshaType.PITTA: 0, DoshaType.KAPHA: 0}
        assert dominant_dosha(counts) == DoshaType.VATA

    def test_unknown_ids_contribute_nothing(self):
        result = assess([999, 17])
        assert result.vikriti == DoshaType.KAPHA
        assert result.imbalance_level == ImbalanceLevel.MILD


class TestImbalanceLevel:

    @pytest.mark.parametrize("tally,expected", [
        (0, ImbalanceLevel.MILD),
        (1, ImbalanceLevel.MILD),
        (2, ImbalanceLevel.MODERATE),
        (3, ImbalanceLevel.MODERATE),
        (4, ImbalanceLevel.SIGNIFICANT),
        (8, ImbalanceLevel.SIGNIFICANT),
    ])
    def test_thresholds(self, tally, expected):
        assert imbalance_level_for(tally) == expected

    def test_four_vata_symptoms_are_significant(self):
        assert assess([1, 2, 3, 4]).imbalance_level == ImbalanceLevel.SIGNIFICANT


class TestPrakriti:
    """Lifestyle heuristic, independent of symptoms."""

    def test_active_and_stressed_is_pitta(self):
        assert estimate_prakriti(SleepQuality.GOOD, StressLevel.HIGH, ActivityLevel.ACTIVE) == DoshaType.PITTA

    def test_active_with_low_stress_is_vata(self):
        assert estimate_prakriti(SleepQuality.GOOD, StressLevel.LOW, ActivityLevel.ACTIVE) == DoshaType.VATA

    def test_sedentary_sleeping_well_is_kapha(self):
        assert estimate_prakriti(SleepQuality.FAIR, StressLevel.LOW, ActivityLevel.SEDENTARY) == DoshaType.KAPHA

    def test_sedentary_with_poor_sleep_is_vata(self):
        assert estimate_prakriti(SleepQuality.POOR, StressLevel.LOW, ActivityLevel.SEDENTARY) == DoshaType.VATA

    def test_pattern_consistent_when_vikriti_matches_prakriti(self):
        lifestyle = (SleepQuality.GOOD, StressLevel.LOW, ActivityLevel.SEDENTARY)
        result = assess([17], lifestyle)
        assert result.prakriti == DoshaType.KAPHA
        assert result.pattern_consistent is True

    def test_pattern_inconsistent_with_single_mismatched_symptom(self):
        result = assess([10])
        assert result.prakriti == DoshaType.VATA
        assert result.pattern_consistent is False

    def test_strong_signal_is_consistent_without_match(self):
        assert assess([9, 10]).pattern_consistent is True


class TestDoshaBalance:

    def test_empty_selection_is_mild_vata_with_display_floor(self):
        result = assess([])
        assert result.vikriti == DoshaType.VATA
        assert result.imbalance_level == ImbalanceLevel.MILD
        balance = result.dosha_balance
        assert (balance.vata, balance.pitta, balance.kapha) == (33, 33, 34)

    def test_single_symptom_remainder_goes_to_vikriti(self):
        balance = assess([10]).dosha_balance
        assert (balance.vata, balance.pitta, balance.kapha) == (33, 33, 34)

    def test_even_split_gives_rounding_remainder_to_vikriti(self):
        balance = assess([1, 9, 17]).dosha_balance
        assert (balance.vata, balance.pitta, balance.kapha) == (34, 33, 33)

    def test_balance_always_sums_to_one_hundred(self):
        ids = list(range(1, 25))
        for size in (1, 2, 3, 5):
            for combo in itertools.islice(itertools.combinations(ids, size), 200):
                balance = assess(list(combo)).dosha_balance
                assert balance.vata + balance.pitta + balance.kapha == 100

    def test_scoring_is_deterministic(self):
        assert assess([1, 10, 22]) == assess([1, 10, 22])
