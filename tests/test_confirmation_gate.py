"""
Tests for the diagnostic confirmation gate.
"""
import itertools

from ayur_core_lib.core.confirmation_gate import (
    REASON_CURRENT_DISCOMFORT,
    REASON_LOW_CONFIDENCE,
    REASON_MULTIPLE_CONDITIONS,
    REASON_OVERLAPPING_PATTERNS,
    apply_advanced_inputs,
    evaluate_gate,
)
from ayur_core_lib.core.risk import assess_risk
from ayur_core_lib.models.assessment import AdvancedInputType
from ayur_core_lib.models.case import AdvancedInputs
from ayur_core_lib.models.common import PrimaryGoal


def gate_for(ids, goal=PrimaryGoal.PREVENTION):
    return evaluate_gate(ids, assess_risk(ids, None, goal), goal)


class TestEvaluateGate:

    def test_low_confidence_digestive_asks_for_tongue_image(self):
        gate = gate_for([10])
        assert gate.triggered is True
        assert gate.trigger_reasons == [REASON_LOW_CONFIDENCE]
        assert gate.required_inputs == [AdvancedInputType.TONGUE_IMAGE]
        assert gate.can_enable_medicines is False
        assert gate.can_proceed is False
        assert gate.inputs_provided is False

    def test_overlap_and_discomfort_with_high_risk(self):
        gate = gate_for([1, 2, 3, 4, 6], PrimaryGoal.CURRENT_DISCOMFORT)
        assert gate.trigger_reasons == [REASON_OVERLAPPING_PATTERNS, REASON_CURRENT_DISCOMFORT]
        assert gate.required_inputs == [
            AdvancedInputType.SKIN_IMAGE,
            AdvancedInputType.DOCTOR_CONSULTATION,
        ]

    def test_multiple_conditions(self):
        gate = gate_for([1, 4, 5])
        assert gate.trigger_reasons == [REASON_MULTIPLE_CONDITIONS]
        assert gate.required_inputs == [
            AdvancedInputType.SKIN_IMAGE,
            AdvancedInputType.TONGUE_IMAGE,
        ]

    def test_face_image_is_the_fallback(self):
        gate = gate_for([2])
        assert gate.triggered is True
        assert gate.required_inputs == [AdvancedInputType.FACE_IMAGE]

    def test_confident_single_cluster_passes(self):
        gate = gate_for([2, 8])
        assert gate.triggered is False
        assert gate.trigger_reasons == []
        assert gate.required_inputs == []
        assert gate.can_enable_medicines is True
        assert gate.can_proceed is True

    def test_current_discomfort_always_triggers(self):
        gate = gate_for([2, 8], PrimaryGoal.CURRENT_DISCOMFORT)
        assert gate.trigger_reasons == [REASON_CURRENT_DISCOMFORT]

    def test_triggered_gate_never_unlocks_medicines(self):
        ids = [1, 2, 4, 6, 9, 10, 18, 19]
        for size in (1, 2, 3, 4):
            for combo in itertools.combinations(ids, size):
                for goal in PrimaryGoal:
                    gate = gate_for(list(combo), goal)
                    if gate.triggered:
                        assert gate.required_inputs
                        assert gate.can_enable_medicines is False


class TestApplyAdvancedInputs:

    def test_doctor_flag_does_not_satisfy_image_requirements(self):
        gate = gate_for([4, 5])
        assert gate.required_inputs == [AdvancedInputType.SKIN_IMAGE, AdvancedInputType.TONGUE_IMAGE]

        updated = apply_advanced_inputs(gate, AdvancedInputs(doctor_consultation_completed=True))
        assert updated.inputs_provided is False
        assert updated.can_enable_medicines is False
        assert updated.can_proceed is False

    def test_all_required_evidence_unlocks(self):
        gate = gate_for([1, 2, 3, 4, 6], PrimaryGoal.CURRENT_DISCOMFORT)
        evidence = AdvancedInputs(skin_image_ref="img://skin", doctor_consultation_completed=True)

        updated = apply_advanced_inputs(gate, evidence)
        assert updated.inputs_provided is True
        assert updated.can_enable_medicines is True
        assert updated.triggered is True
        assert updated.trigger_reasons == gate.trigger_reasons
        assert updated.required_inputs == gate.required_inputs

    def test_unchecked_requirement_accepts_any_evidence(self):
        gate = gate_for([2])
        assert apply_advanced_inputs(gate, AdvancedInputs(notes="photo taken in daylight")).inputs_provided
        assert apply_advanced_inputs(gate, AdvancedInputs(tongue_image_ref="img://t")).inputs_provided

    def test_unchecked_requirement_rejects_empty_evidence(self):
        gate = gate_for([2])
        assert apply_advanced_inputs(gate, AdvancedInputs()).inputs_provided is False

    def test_empty_string_reference_is_missing(self):
        gate = gate_for([10])
        assert apply_advanced_inputs(gate, AdvancedInputs(tongue_image_ref="")).inputs_provided is False
