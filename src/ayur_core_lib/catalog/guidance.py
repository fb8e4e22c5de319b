"""Preventive guidance reference data.

NOTE: These are lifestyle suggestions, NOT prescriptions. Plain data only;
this module must not import the models package.
"""

from typing import Dict, List, Optional

DISCLAIMER = (
    "This is not a medical diagnosis. The information provided is for educational "
    "and preventive wellness purposes only. Always consult a qualified healthcare "
    "professional for medical advice, diagnosis, or treatment."
)

# Keyed by DoshaType value
DOSHA_GUIDANCE: Dict[str, Dict[str, List[str]]] = {
    "vata": {
        "habits": [
            "Maintain a regular daily routine with consistent meal and sleep times",
            "Practice gentle, grounding exercises like yoga or walking",
            "Avoid excessive cold, wind, and dry environments",
            "Take warm baths with calming essential oils",
            "Practice meditation or deep breathing for 10-15 minutes daily",
        ],
        "food_preferences": [
            "Favor warm, cooked foods over raw or cold foods",
            "Include healthy fats like ghee and sesame oil",
            "Choose sweet, sour, and salty tastes",
            "Eat warm soups, stews, and grains",
            "Stay well-hydrated with warm water and herbal teas",
        ],
        "sleep_tips": [
            "Go to bed by 10 PM and wake at a consistent time",
            "Create a calm, quiet sleeping environment",
            "Avoid stimulating activities before bed",
            "Apply warm sesame oil to feet before sleep",
            "Practice relaxation techniques before bed",
        ],
        "stress_tips": [
            "Practice grounding exercises when feeling anxious",
            "Limit multitasking and focus on one thing at a time",
            "Spend time in nature, especially near water",
            "Maintain social connections with supportive people",
            "Avoid over-scheduling and allow for rest",
        ],
        "activity_tips": [
            "Choose gentle, low-impact exercises",
            "Practice yoga with slow, mindful movements",
            "Avoid excessive cardio or high-intensity workouts",
            "Include stretching and flexibility exercises",
            "Exercise at the same time each day",
        ],
    },
    "pitta": {
        "habits": [
            "Stay cool and avoid overheating",
            "Take breaks during intense work periods",
            "Practice moderation in all activities",
            "Spend time in nature, especially near water",
            "Avoid excessive competition and perfectionism",
        ],
        "food_preferences": [
            "Favor cooling foods like cucumbers, melons, and leafy greens",
            "Choose sweet, bitter, and astringent tastes",
            "Avoid spicy, oily, and fried foods",
            "Eat at regular intervals without skipping meals",
            "Include cooling herbs like coriander and mint",
        ],
        "sleep_tips": [
            "Keep bedroom cool and well-ventilated",
            "Avoid working or screens close to bedtime",
            "Go to bed before 10 PM to avoid second wind",
            "Use cooling colors in the bedroom",
            "Practice calming activities before sleep",
        ],
        "stress_tips": [
            "Practice cooling breathing exercises",
            "Channel competitive energy into positive outlets",
            "Learn to delegate and let go of control",
            "Take regular breaks from intense work",
            "Practice forgiveness and letting go of anger",
        ],
        "activity_tips": [
            "Exercise during cooler parts of the day",
            "Choose swimming or water-based activities",
            "Avoid exercising during peak sun hours",
            "Balance intense workouts with relaxation",
            "Practice yoga poses that promote cooling",
        ],
    },
    "kapha": {
        "habits": [
            "Rise early, ideally before 6 AM",
            "Maintain an active, stimulating daily routine",
            "Avoid daytime napping",
            "Seek variety and new experiences",
            "Declutter living and work spaces regularly",
        ],
        "food_preferences": [
            "Favor light, warm, and dry foods",
            "Choose pungent, bitter, and astringent tastes",
            "Reduce sweet, sour, and salty foods",
            "Avoid heavy, oily, and dairy-rich foods",
            "Include warming spices like ginger and black pepper",
        ],
        "sleep_tips": [
            "Wake up early, before sunrise if possible",
            "Avoid sleeping more than 7-8 hours",
            "Keep bedroom bright and stimulating in morning",
            "Avoid heavy meals close to bedtime",
            "Use invigorating scents in the morning",
        ],
        "stress_tips": [
            "Stay active and avoid prolonged sitting",
            "Seek new challenges and learning opportunities",
            "Maintain social connections and engage with others",
            "Set goals and work toward them consistently",
            "Practice energizing breathing exercises",
        ],
        "activity_tips": [
            "Engage in vigorous, stimulating exercise",
            "Try new and challenging physical activities",
            "Exercise in the morning for best results",
            "Include cardio and strength training",
            "Avoid sedentary activities for long periods",
        ],
    },
}

# Always shown alongside results
MEDICAL_AWARENESS: Dict[str, List[str]] = {
    "escalation_advice": [
        "If symptoms persist or worsen after 2 weeks, consult a healthcare provider",
        "For sudden or severe symptoms, seek immediate medical attention",
        "Keep track of your symptoms and share with your healthcare provider",
    ],
    "warning_signs_to_watch": [
        "Sudden unexplained weight loss",
        "Persistent fever or night sweats",
        "Severe or worsening pain",
        "Difficulty breathing or chest pain",
        "Changes in consciousness or confusion",
    ],
    "when_to_seek_help": [
        "When symptoms significantly impact daily activities",
        "When home remedies provide no relief after a reasonable time",
        "When experiencing new or unusual symptoms",
        "When symptoms are accompanied by high fever",
        "When you feel something is seriously wrong",
    ],
}

# Entries taken from each guidance list for the preventive plan
GUIDANCE_SLICE_SIZES: Dict[str, int] = {
    "habits": 3,
    "food_preferences": 3,
    "sleep_tips": 2,
    "stress_tips": 2,
    "activity_tips": 2,
}


class GuidanceTable:
    """Read-only access to per-dosha guidance lists."""

    def __init__(self, table: Optional[Dict[str, Dict[str, List[str]]]] = None):
        self._table = table if table is not None else DOSHA_GUIDANCE
        for dosha, sections in self._table.items():
            for section, size in GUIDANCE_SLICE_SIZES.items():
                if len(sections.get(section, [])) < size:
                    raise ValueError(
                        f"Guidance for {dosha} needs at least {size} entries in {section}"
                    )

    def by_type(self, dosha: str) -> Dict[str, List[str]]:
        key = getattr(dosha, "value", dosha)
        return self._table[key]


default_guidance = GuidanceTable()
