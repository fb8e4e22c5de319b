"""
Tests for model validation rules and the reference catalog.
"""
from datetime import timedelta

import pytest
from pydantic import ValidationError

from ayur_core_lib.catalog.guidance import DISCLAIMER, GuidanceTable, default_guidance
from ayur_core_lib.catalog.symptoms import (
    CATEGORY_DIGESTIVE,
    SYMPTOMS,
    default_catalog,
)
from ayur_core_lib.models.api_models import CaseResponse
from ayur_core_lib.models.assessment import AdvancedInputType, ConfirmationGateResult, DoshaBalance
from ayur_core_lib.models.case import (
    AdvancedInputs,
    Case,
    DoctorDecision,
    NextStepsOptions,
    SymptomInput,
)
from ayur_core_lib.models.common import DoshaType, parse_utc_timestamp, utc_timestamp
from ayur_core_lib.utils import to_json_compatible

from conftest import make_context


class TestAssessmentModels:

    def test_dosha_balance_must_sum_to_one_hundred(self):
        with pytest.raises(ValidationError):
            DoshaBalance(vata=33, pitta=33, kapha=33)
        assert DoshaBalance(vata=50, pitta=25, kapha=25).share_of(DoshaType.PITTA) == 25

    def test_triggered_gate_needs_required_inputs(self):
        with pytest.raises(ValidationError):
            ConfirmationGateResult(triggered=True, can_proceed=False, can_enable_medicines=False)

    def test_triggered_gate_cannot_unlock_without_inputs(self):
        with pytest.raises(ValidationError):
            ConfirmationGateResult(
                triggered=True,
                required_inputs=[AdvancedInputType.FACE_IMAGE],
                can_proceed=True,
                can_enable_medicines=True,
            )


class TestCaseModels:

    def test_symptom_input_rejects_empty_and_duplicates(self):
        with pytest.raises(ValidationError):
            SymptomInput(selected_symptom_ids=[])
        with pytest.raises(ValidationError):
            SymptomInput(selected_symptom_ids=[1, 1])

    def test_user_context_is_frozen(self):
        context = make_context()
        with pytest.raises(ValidationError):
            context.sleep_quality = "poor"

    def test_case_id_format(self):
        case = Case(user_context=make_context())
        assert case.case_id.startswith("case_")
        with pytest.raises(ValidationError):
            Case(user_context=make_context(), case_id="not-a-case")

    def test_timestamps_must_be_ordered(self):
        case = Case(user_context=make_context())
        with pytest.raises(ValidationError):
            Case(
                user_context=make_context(),
                created_at=case.created_at,
                updated_at=case.created_at - timedelta(seconds=1),
            )

    def test_disabled_medicines_need_a_reason(self):
        with pytest.raises(ValidationError):
            NextStepsOptions(medicines_enabled=False)
        assert NextStepsOptions(medicines_enabled=True).lifestyle_only_enabled is True

    def test_rejection_needs_reason(self):
        with pytest.raises(ValidationError):
            DoctorDecision(decision="rejected")

    def test_evidence_presence(self):
        assert AdvancedInputs().has_any_evidence is False
        assert AdvancedInputs(face_image_ref="img://face").has_any_evidence is True

    def test_case_response_carries_disclaimer(self):
        case = Case(user_context=make_context())
        response = CaseResponse.from_case(case)
        assert response.case_id == case.case_id
        assert response.model_dump(mode="json")["disclaimer"] == DISCLAIMER


class TestCatalog:

    def test_twenty_four_symptoms(self):
        assert [s.id for s in SYMPTOMS] == list(range(1, 25))

    def test_lookup(self):
        assert default_catalog.by_id(10).category == CATEGORY_DIGESTIVE
        assert default_catalog.by_id(999) is None
        assert default_catalog.is_skin_symptom(4)
        assert not default_catalog.is_digestive_symptom(4)

    def test_grouping(self):
        assert len(default_catalog.by_dosha(DoshaType.VATA)) == 8
        grouped = default_catalog.by_category()
        assert sum(len(v) for v in grouped.values()) == 24
        assert len(default_catalog.follow_up_questions(CATEGORY_DIGESTIVE)) == 2
        assert default_catalog.follow_up_questions("Unknown") == []

    def test_guidance_accepts_enum_or_value(self):
        assert default_guidance.by_type(DoshaType.KAPHA) == default_guidance.by_type("kapha")

    def test_guidance_table_checks_slice_sizes(self):
        with pytest.raises(ValueError):
            GuidanceTable({"vata": {"habits": ["only one"]}})


class TestSerialization:

    def test_utc_timestamps_round_trip(self):
        stamp = utc_timestamp()
        assert stamp.endswith("Z")
        assert parse_utc_timestamp(stamp).tzinfo is not None

    def test_to_json_compatible(self):
        value = {"dosha": DoshaType.VATA, "inputs": [AdvancedInputs(notes="n")]}
        assert to_json_compatible(value) == {
            "dosha": "vata",
            "inputs": [{
                "skin_image_ref": None,
                "tongue_image_ref": None,
                "face_image_ref": None,
                "doctor_consultation_completed": None,
                "notes": "n",
            }],
        }
