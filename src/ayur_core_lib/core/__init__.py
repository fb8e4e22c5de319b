"""Scoring engine: constitutional and risk scorers, confirmation gate, lifecycle."""

from ayur_core_lib.core.constitutional import assess_constitution
from ayur_core_lib.core.risk import assess_risk
from ayur_core_lib.core.confirmation_gate import apply_advanced_inputs, evaluate_gate
from ayur_core_lib.core.summary import (
    build_health_snapshot,
    build_medical_awareness,
    build_next_steps,
    build_preventive_guidance,
    generate_summary,
    overall_confidence,
)
from ayur_core_lib.core.admin_stats import compute_admin_stats
from ayur_core_lib.core.aggregator import CaseAggregator

__all__ = [
    "assess_constitution",
    "assess_risk",
    "evaluate_gate",
    "apply_advanced_inputs",
    "generate_summary",
    "overall_confidence",
    "build_health_snapshot",
    "build_preventive_guidance",
    "build_medical_awareness",
    "build_next_steps",
    "compute_admin_stats",
    "CaseAggregator",
]
