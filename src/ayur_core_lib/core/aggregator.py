"""
Case Aggregator - orchestrates the case lifecycle over the scorers and the store.

Lifecycle:
  create_case            → CONTEXT_COLLECTED
  submit_symptoms        → SYMPTOMS_SUBMITTED → CONFIRMATION_GATE | DIAGNOSIS_COMPLETE
  submit_advanced_inputs → DIAGNOSIS_COMPLETE | AWAITING_ADVANCED_INPUTS
  request_doctor_review  → AWAITING_DOCTOR_REVIEW (from DIAGNOSIS_COMPLETE only)
  record_doctor_decision → DOCTOR_APPROVED | DOCTOR_REJECTED
  submit_feedback        → COMPLETED (terminal)

Every mutating operation computes all derived fields from a snapshot of the
case first and then writes them with a single store update, so a failure
leaves the stored case untouched. Analytics counters fire after the write and
never affect the result.
"""

import logging
from typing import Any, Dict, List, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from ayur_core_lib.analytics.counters import (
    ADVANCED_INPUT_TRIGGER,
    SAFETY_FLAG,
    CounterSink,
    NullCounterSink,
    drop_off_counter,
    safe_increment,
)
from ayur_core_lib.catalog.guidance import GuidanceTable, default_guidance
from ayur_core_lib.catalog.symptoms import Symptom, SymptomCatalog, default_catalog
from ayur_core_lib.core.admin_stats import compute_admin_stats
from ayur_core_lib.core.confirmation_gate import apply_advanced_inputs, evaluate_gate
from ayur_core_lib.core.constitutional import assess_constitution
from ayur_core_lib.core.risk import assess_risk
from ayur_core_lib.core.summary import (
    MEDICINES_MISSING_INPUTS_REASON,
    build_health_snapshot,
    build_medical_awareness,
    build_next_steps,
    build_preventive_guidance,
    overall_confidence,
)
from ayur_core_lib.exceptions import (
    AyurCoreError,
    EngineError,
    InvalidInputError,
    InvalidTransitionError,
)
from ayur_core_lib.models.api_models import AdminStats, CaseResponse, FeedbackRequest
from ayur_core_lib.models.assessment import DiagnosisResult
from ayur_core_lib.models.case import (
    AdvancedInputs,
    Case,
    CaseStatus,
    CaseStatusTransition,
    DoctorCaseFile,
    DoctorDecision,
    DoctorDecisionType,
    LifestyleSummary,
    SymptomInput,
    UserContext,
    UserFeedback,
)
from ayur_core_lib.storage.base import CaseStore

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

# Statuses from which evidence for the confirmation gate may be submitted
ADVANCED_INPUT_STATUSES = frozenset({
    CaseStatus.CONFIRMATION_GATE,
    CaseStatus.AWAITING_ADVANCED_INPUTS,
    CaseStatus.DIAGNOSIS_COMPLETE,
})


def _parse(model_cls: Type[M], payload: Any) -> M:
    """Validate a payload (model instance or mapping) into exactly model_cls.

    Raises:
        InvalidInputError: payload fails validation
    """
    if isinstance(payload, BaseModel):
        payload = payload.model_dump()
    try:
        return model_cls.model_validate(payload)
    except ValidationError as e:
        raise InvalidInputError(
            f"Invalid {model_cls.__name__}: {e.error_count()} validation error(s)",
            details=e.errors(include_url=False, include_context=False),
        ) from e


def _ensure_not_terminal(case: Case, operation: str) -> None:
    if case.is_terminal:
        raise InvalidTransitionError(
            f"Cannot {operation} on case {case.case_id}: case is {case.status.value}"
        )


class CaseAggregator:
    """
    Entry point for every case operation.

    Usage:
        aggregator = CaseAggregator(InMemoryCaseStore(), InMemoryCounterSink())
        case = await aggregator.create_case(user_context)
        case = await aggregator.submit_symptoms(case.case_id, SymptomInput(selected_symptom_ids=[10]))
        if case.confirmation_gate.triggered:
            case = await aggregator.submit_advanced_inputs(case.case_id, evidence)
    """

    def __init__(
        self,
        store: CaseStore,
        counters: Optional[CounterSink] = None,
        catalog: Optional[SymptomCatalog] = None,
        guidance: Optional[GuidanceTable] = None,
    ):
        self.store = store
        self.counters = counters or NullCounterSink()
        self.catalog = catalog or default_catalog
        self.guidance = guidance or default_guidance

    # ============================================================
    # Intake
    # ============================================================

    async def create_case(self, user_context: Union[UserContext, Dict[str, Any]]) -> CaseResponse:
        context = _parse(UserContext, user_context)
        case = await self.store.create(context)
        logger.info(f"Case created: {case.case_id} goal={context.primary_goal.value}")
        return CaseResponse.from_case(case)

    async def get_case(self, case_id: str) -> CaseResponse:
        return CaseResponse.from_case(await self.store.get(case_id))

    def list_symptoms(self) -> List[Symptom]:
        return self.catalog.all()

    # ============================================================
    # Scoring
    # ============================================================

    async def submit_symptoms(
        self,
        case_id: str,
        symptom_input: Union[SymptomInput, Dict[str, Any]],
    ) -> CaseResponse:
        """
        Score a symptom selection and evaluate the confirmation gate.

        Resubmission restarts the case: previous evidence and doctor review
        are cleared along with the recomputed results.

        Raises:
            CaseNotFoundError: unknown case id
            InvalidInputError: empty or duplicate selection
            InvalidTransitionError: case already completed
            EngineError: scoring failed; nothing was written
        """
        case = await self.store.get(case_id)
        selection = _parse(SymptomInput, symptom_input)
        _ensure_not_terminal(case, "submit symptoms")

        ctx = case.user_context
        ids = selection.selected_symptom_ids

        try:
            constitutional = assess_constitution(
                ids, ctx.sleep_quality, ctx.stress_level, ctx.activity_level, self.catalog
            )
            risk = assess_risk(ids, selection.free_text, ctx.primary_goal, self.catalog)
            gate = evaluate_gate(ids, risk, ctx.primary_goal, self.catalog)

            diagnosis = DiagnosisResult(
                constitutional=constitutional,
                risk=risk,
                overall_confidence=overall_confidence(constitutional, risk),
                is_finalized=not gate.triggered,
            )
            fields: Dict[str, Any] = {
                "symptom_input": selection,
                "diagnosis_result": diagnosis,
                "confirmation_gate": gate,
                "health_snapshot": build_health_snapshot(constitutional, risk),
                "preventive_guidance": build_preventive_guidance(constitutional, self.guidance),
                "medical_awareness": build_medical_awareness(),
                "next_steps_options": build_next_steps(gate),
                "advanced_inputs": None,
                "doctor_case_file": None,
                "doctor_decision": None,
            }
        except AyurCoreError:
            raise
        except Exception as e:
            logger.error(f"Scoring failed for case {case_id}: {e}", exc_info=True)
            raise EngineError(f"Scoring failed for case {case_id}: {e}") from e

        final_status = CaseStatus.CONFIRMATION_GATE if gate.triggered else CaseStatus.DIAGNOSIS_COMPLETE
        history = list(case.status_history)
        history.append(CaseStatusTransition(
            from_status=case.status,
            to_status=CaseStatus.SYMPTOMS_SUBMITTED,
            reason=f"{len(ids)} symptom(s) submitted",
        ))
        history.append(CaseStatusTransition(
            from_status=CaseStatus.SYMPTOMS_SUBMITTED,
            to_status=final_status,
            reason="; ".join(gate.trigger_reasons) if gate.triggered else "Confirmation gate passed",
        ))
        fields["status"] = final_status
        fields["status_history"] = history

        updated = await self.store.update(case_id, fields)
        logger.info(
            f"Case {case_id}: {case.status.value} → {final_status.value} "
            f"(vikriti={constitutional.vikriti.value}, risk={risk.risk_level.value}, "
            f"confidence={risk.confidence_score})"
        )

        if gate.triggered:
            await safe_increment(self.counters, ADVANCED_INPUT_TRIGGER)
        if risk.red_flags:
            await safe_increment(self.counters, SAFETY_FLAG)

        return CaseResponse.from_case(updated)

    async def submit_advanced_inputs(
        self,
        case_id: str,
        evidence: Union[AdvancedInputs, Dict[str, Any]],
    ) -> CaseResponse:
        """
        Re-evaluate the confirmation gate against submitted evidence.

        Raises:
            CaseNotFoundError: unknown case id
            InvalidInputError: malformed evidence
            InvalidTransitionError: no gate has been evaluated yet, or the case
                has moved on to doctor review or completion
        """
        case = await self.store.get(case_id)
        inputs = _parse(AdvancedInputs, evidence)
        _ensure_not_terminal(case, "submit advanced inputs")

        if case.confirmation_gate is None or case.diagnosis_result is None:
            raise InvalidTransitionError(
                f"Case {case_id} has no confirmation gate; submit symptoms first"
            )
        if case.status not in ADVANCED_INPUT_STATUSES:
            raise InvalidTransitionError(
                f"Cannot submit advanced inputs on case {case_id} in status {case.status.value}"
            )

        try:
            gate = apply_advanced_inputs(case.confirmation_gate, inputs)
            diagnosis = DiagnosisResult(
                constitutional=case.diagnosis_result.constitutional,
                risk=case.diagnosis_result.risk,
                overall_confidence=case.diagnosis_result.overall_confidence,
                is_finalized=gate.inputs_provided,
            )
            next_steps = build_next_steps(gate, disabled_reason=MEDICINES_MISSING_INPUTS_REASON)
        except AyurCoreError:
            raise
        except Exception as e:
            logger.error(f"Gate re-evaluation failed for case {case_id}: {e}", exc_info=True)
            raise EngineError(f"Gate re-evaluation failed for case {case_id}: {e}") from e

        new_status = (
            CaseStatus.DIAGNOSIS_COMPLETE if gate.inputs_provided
            else CaseStatus.AWAITING_ADVANCED_INPUTS
        )
        fields: Dict[str, Any] = {
            "advanced_inputs": inputs,
            "confirmation_gate": gate,
            "diagnosis_result": diagnosis,
            "next_steps_options": next_steps,
        }
        if new_status != case.status:
            fields["status"] = new_status
            fields["status_history"] = list(case.status_history) + [CaseStatusTransition(
                from_status=case.status,
                to_status=new_status,
                reason="Required inputs provided" if gate.inputs_provided
                else "Required inputs missing",
            )]

        updated = await self.store.update(case_id, fields)
        logger.info(
            f"Case {case_id}: advanced inputs submitted, "
            f"inputs_provided={gate.inputs_provided} status={new_status.value}"
        )
        return CaseResponse.from_case(updated)

    # ============================================================
    # Doctor Review
    # ============================================================

    async def request_doctor_review(self, case_id: str, consent_given: bool) -> CaseResponse:
        """
        Package the case for a practitioner.

        Only a finished diagnosis can be reviewed; a gated case must supply its
        evidence first. Repeating the request while review is pending returns
        the case unchanged.

        Raises:
            CaseNotFoundError: unknown case id
            InvalidInputError: consent not given
            InvalidTransitionError: case is not in diagnosis_complete
        """
        case = await self.store.get(case_id)
        _ensure_not_terminal(case, "request doctor review")

        if not consent_given:
            raise InvalidInputError("Consent is required to share the case with a doctor")
        if case.diagnosis_result is None or case.symptom_input is None:
            raise InvalidTransitionError(
                f"Case {case_id} has no diagnosis; submit symptoms first"
            )
        if case.status == CaseStatus.AWAITING_DOCTOR_REVIEW:
            return CaseResponse.from_case(case)
        if case.status != CaseStatus.DIAGNOSIS_COMPLETE:
            raise InvalidTransitionError(
                f"Cannot request doctor review on case {case_id} in status {case.status.value}"
            )

        ctx = case.user_context
        gate = case.confirmation_gate
        diagnosis = case.diagnosis_result
        verified = gate is not None and gate.triggered and gate.inputs_provided

        case_file = DoctorCaseFile(
            symptoms=case.symptom_input,
            lifestyle=LifestyleSummary(
                sleep_quality=ctx.sleep_quality,
                stress_level=ctx.stress_level,
                activity_level=ctx.activity_level,
            ),
            advanced_inputs=case.advanced_inputs,
            ai_confidence_before=diagnosis.overall_confidence,
            ai_confidence_after=diagnosis.overall_confidence if verified else None,
            dosha_analysis=diagnosis.constitutional,
        )

        updated = await self.store.update(case_id, {
            "doctor_case_file": case_file,
            "status": CaseStatus.AWAITING_DOCTOR_REVIEW,
            "status_history": list(case.status_history) + [CaseStatusTransition(
                from_status=case.status,
                to_status=CaseStatus.AWAITING_DOCTOR_REVIEW,
                reason="User consented to doctor review",
            )],
        })
        logger.info(f"Case {case_id}: doctor review requested")
        return CaseResponse.from_case(updated)

    async def record_doctor_decision(
        self,
        case_id: str,
        decision: Union[DoctorDecision, Dict[str, Any]],
    ) -> CaseResponse:
        case = await self.store.get(case_id)
        verdict = _parse(DoctorDecision, decision)

        if case.status != CaseStatus.AWAITING_DOCTOR_REVIEW:
            raise InvalidTransitionError(
                f"Case {case_id} is not awaiting doctor review (status {case.status.value})"
            )

        new_status = (
            CaseStatus.DOCTOR_REJECTED if verdict.decision == DoctorDecisionType.REJECTED
            else CaseStatus.DOCTOR_APPROVED
        )
        updated = await self.store.update(case_id, {
            "doctor_decision": verdict,
            "status": new_status,
            "status_history": list(case.status_history) + [CaseStatusTransition(
                from_status=case.status,
                to_status=new_status,
                reason=f"Doctor decision: {verdict.decision.value}",
            )],
        })
        logger.info(f"Case {case_id}: doctor decision {verdict.decision.value}")
        return CaseResponse.from_case(updated)

    # ============================================================
    # Outcome & Analytics
    # ============================================================

    async def submit_feedback(
        self,
        case_id: str,
        feedback: Union[FeedbackRequest, Dict[str, Any]],
    ) -> CaseResponse:
        """Store feedback and complete the case. Feedback is terminal."""
        case = await self.store.get(case_id)
        request = _parse(FeedbackRequest, feedback)
        _ensure_not_terminal(case, "submit feedback")

        record = UserFeedback(case_id=case_id, **request.model_dump())
        updated = await self.store.update(case_id, {
            "feedback": record,
            "status": CaseStatus.COMPLETED,
            "status_history": list(case.status_history) + [CaseStatusTransition(
                from_status=case.status,
                to_status=CaseStatus.COMPLETED,
                reason="Feedback received",
            )],
        })
        logger.info(f"Case {case_id}: completed (helpful={record.was_helpful})")
        return CaseResponse.from_case(updated)

    async def record_drop_off(self, stage: str) -> None:
        if not stage:
            raise InvalidInputError("Drop-off stage must not be empty")
        await safe_increment(self.counters, drop_off_counter(stage))

    async def admin_stats(self) -> AdminStats:
        cases = await self.store.list_cases()
        try:
            counters = await self.counters.get_counters()
        except Exception as e:  # noqa: BLE001
            logger.warning(f"Analytics counters unavailable for admin stats: {e}")
            counters = {}
        return compute_admin_stats(cases, counters)
