"""Read-only reference tables: symptoms, follow-up questions, guidance text."""

from ayur_core_lib.catalog.symptoms import (
    Symptom,
    SymptomCatalog,
    FollowUpQuestion,
    SYMPTOMS,
    MENTAL_SYMPTOM_IDS,
    PHYSICAL_SYMPTOM_IDS,
    SEVERE_SYMPTOM_IDS,
    FATIGUE_SYMPTOM_ID,
    default_catalog,
)
from ayur_core_lib.catalog.guidance import (
    DISCLAIMER,
    DOSHA_GUIDANCE,
    MEDICAL_AWARENESS,
    GUIDANCE_SLICE_SIZES,
    GuidanceTable,
    default_guidance,
)

__all__ = [
    "Symptom", "SymptomCatalog", "FollowUpQuestion", "SYMPTOMS",
    "MENTAL_SYMPTOM_IDS", "PHYSICAL_SYMPTOM_IDS", "SEVERE_SYMPTOM_IDS",
    "FATIGUE_SYMPTOM_ID", "default_catalog",
    "DISCLAIMER", "DOSHA_GUIDANCE", "MEDICAL_AWARENESS", "GUIDANCE_SLICE_SIZES",
    "GuidanceTable", "default_guidance",
]
