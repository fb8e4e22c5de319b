"""Symptom catalog - immutable reference table consumed by the scorers.

Each symptom has a category (used for clustering and evidence selection) and
an optional related dosha (used for the constitutional tally). Unknown ids are
tolerated everywhere: they contribute nothing to any score.
"""

from collections import OrderedDict
from typing import Dict, FrozenSet, Iterable, List, Optional

from pydantic import BaseModel, Field

from ayur_core_lib.models.common import DoshaType


class Symptom(BaseModel):
    id: int
    name: str
    category: str
    related_dosha: Optional[DoshaType] = None

    class Config:
        frozen = True


class FollowUpOption(BaseModel):
    label: str
    score: int = Field(ge=0)


class FollowUpQuestion(BaseModel):
    id: str
    text: str
    options: List[FollowUpOption]


# ============================================================
# Category Labels
# ============================================================

CATEGORY_ENERGY = "Energy"
CATEGORY_MENTAL = "Mental"
CATEGORY_SLEEP = "Sleep"
CATEGORY_SKIN = "Skin"
CATEGORY_DIGESTIVE = "Digestive"
CATEGORY_PHYSICAL = "Physical"
CATEGORY_RESPIRATORY = "Respiratory"


def _symptom(id: int, name: str, category: str, dosha: DoshaType) -> Symptom:
    return Symptom(id=id, name=name, category=category, related_dosha=dosha)


SYMPTOMS: List[Symptom] = [
    # Vata-related
    _symptom(1, "Fatigue / Low energy", CATEGORY_ENERGY, DoshaType.VATA),
    _symptom(2, "Anxiety / Nervousness", CATEGORY_MENTAL, DoshaType.VATA),
    _symptom(3, "Difficulty sleeping", CATEGORY_SLEEP, DoshaType.VATA),
    _symptom(4, "Dry skin", CATEGORY_SKIN, DoshaType.VATA),
    _symptom(5, "Constipation", CATEGORY_DIGESTIVE, DoshaType.VATA),
    _symptom(6, "Joint pain / Stiffness", CATEGORY_PHYSICAL, DoshaType.VATA),
    _symptom(7, "Cold hands / feet", CATEGORY_PHYSICAL, DoshaType.VATA),
    _symptom(8, "Racing thoughts", CATEGORY_MENTAL, DoshaType.VATA),
    # Pitta-related
    _symptom(9, "Skin rashes / Inflammation", CATEGORY_SKIN, DoshaType.PITTA),
    _symptom(10, "Heartburn / Acid reflux", CATEGORY_DIGESTIVE, DoshaType.PITTA),
    _symptom(11, "Irritability / Anger", CATEGORY_MENTAL, DoshaType.PITTA),
    _symptom(12, "Excessive sweating", CATEGORY_PHYSICAL, DoshaType.PITTA),
    _symptom(13, "Loose stools / Diarrhea", CATEGORY_DIGESTIVE, DoshaType.PITTA),
    _symptom(14, "Eye irritation", CATEGORY_PHYSICAL, DoshaType.PITTA),
    _symptom(15, "Feeling overheated", CATEGORY_PHYSICAL, DoshaType.PITTA),
    _symptom(16, "Skin sensitivity", CATEGORY_SKIN, DoshaType.PITTA),
    # Kapha-related
    _symptom(17, "Weight gain / Sluggishness", CATEGORY_PHYSICAL, DoshaType.KAPHA),
    _symptom(18, "Congestion / Excess mucus", CATEGORY_RESPIRATORY, DoshaType.KAPHA),
    _symptom(19, "Lethargy / Low motivation", CATEGORY_MENTAL, DoshaType.KAPHA),
    _symptom(20, "Water retention / Swelling", CATEGORY_PHYSICAL, DoshaType.KAPHA),
    _symptom(21, "Heavy feeling after meals", CATEGORY_DIGESTIVE, DoshaType.KAPHA),
    _symptom(22, "Oily skin", CATEGORY_SKIN, DoshaType.KAPHA),
    _symptom(23, "Oversleeping", CATEGORY_SLEEP, DoshaType.KAPHA),
    _symptom(24, "Lack of appetite", CATEGORY_DIGESTIVE, DoshaType.KAPHA),
]


# Fixed id sets used by the risk scorer. They deliberately do not follow the
# catalog categories (e.g. 19 is Mental in the catalog and also the fatigue id).
MENTAL_SYMPTOM_IDS: FrozenSet[int] = frozenset({2, 3, 8, 11, 19})
PHYSICAL_SYMPTOM_IDS: FrozenSet[int] = frozenset({6, 7, 12, 17, 20})
SEVERE_SYMPTOM_IDS: FrozenSet[int] = frozenset({6, 10, 13, 14, 20})
FATIGUE_SYMPTOM_ID: int = 19


def _question(id: str, text: str, *options) -> FollowUpQuestion:
    return FollowUpQuestion(
        id=id,
        text=text,
        options=[FollowUpOption(label=label, score=score) for label, score in options],
    )


FOLLOW_UP_QUESTIONS: Dict[str, List[FollowUpQuestion]] = {
    CATEGORY_DIGESTIVE: [
        _question("dig_1", "Is there a burning sensation in the stomach?",
                  ("No", 0), ("Occasional", 1), ("Frequent/Severe", 3)),
        _question("dig_2", "Is the discomfort related to specific types of food?",
                  ("No", 0), ("Yes, spicy/oily", 1), ("Yes, almost everything", 2)),
    ],
    CATEGORY_MENTAL: [
        _question("men_1", "Does the anxiety interfere with your daily tasks?",
                  ("Not at all", 0), ("Somewhat", 2), ("Completely", 4)),
        _question("men_2", "How often do you experience these thoughts?",
                  ("Rarely", 0), ("Daily", 2), ("Multiple times a day", 3)),
    ],
    CATEGORY_ENERGY: [
        _question("en_1", "Do you feel rested after a full night's sleep?",
                  ("Yes", 0), ("Sometimes", 1), ("Never", 3)),
        _question("en_2", "Does the fatigue worsen after physical activity?",
                  ("No", 0), ("Slightly", 1), ("Significantly", 2)),
    ],
    CATEGORY_RESPIRATORY: [
        _question("res_1", "Is there difficulty in breathing or shortness of breath?",
                  ("No", 0), ("Only during exertion", 2), ("Even at rest", 5)),
        _question("res_2", "Is the congestion accompanied by a persistent cough?",
                  ("No", 0), ("Dry cough", 1), ("Productive/Heavy cough", 3)),
    ],
    CATEGORY_PHYSICAL: [
        _question("phy_1", "Is there visible swelling or redness in the area?",
                  ("No", 0), ("Mild swelling", 2), ("Severe inflammation", 4)),
        _question("phy_2", "Does the pain restrict your range of motion?",
                  ("No", 0), ("Partially", 2), ("Significantly", 3)),
    ],
    CATEGORY_SKIN: [
        _question("ski_1", "Is the skin area painful or itchy?",
                  ("Neither", 0), ("Itchy", 1), ("Painful/Burning", 3)),
        _question("ski_2", "Is the condition spreading to other parts of the body?",
                  ("No", 0), ("Slowly", 2), ("Rapidly", 4)),
    ],
}


class SymptomCatalog:
    """Read-only lookup over a symptom table.

    Usage:
        catalog = SymptomCatalog()
        catalog.by_id(10).category  # "Digestive"
        catalog.by_id(999)          # None
    """

    def __init__(self, symptoms: Optional[Iterable[Symptom]] = None):
        table = list(symptoms) if symptoms is not None else SYMPTOMS
        self._by_id: Dict[int, Symptom] = {s.id: s for s in table}

    def by_id(self, symptom_id: int) -> Optional[Symptom]:
        return self._by_id.get(symptom_id)

    def all(self) -> List[Symptom]:
        return list(self._by_id.values())

    def by_category(self) -> Dict[str, List[Symptom]]:
        """Group symptoms by category, categories in first-seen order."""
        grouped: Dict[str, List[Symptom]] = OrderedDict()
        for symptom in self._by_id.values():
            grouped.setdefault(symptom.category, []).append(symptom)
        return dict(grouped)

    def by_dosha(self, dosha: DoshaType) -> List[Symptom]:
        return [s for s in self._by_id.values() if s.related_dosha == dosha]

    def has_category(self, symptom_id: int, category: str) -> bool:
        symptom = self.by_id(symptom_id)
        return symptom is not None and symptom.category == category

    def is_skin_symptom(self, symptom_id: int) -> bool:
        return self.has_category(symptom_id, CATEGORY_SKIN)

    def is_digestive_symptom(self, symptom_id: int) -> bool:
        return self.has_category(symptom_id, CATEGORY_DIGESTIVE)

    def follow_up_questions(self, category: str) -> List[FollowUpQuestion]:
        return list(FOLLOW_UP_QUESTIONS.get(category, []))


default_catalog = SymptomCatalog()
