"""Common models shared across the assessment engine.

This module contains the foundational vocabulary used throughout the library:
- DoshaType: the three constitutional types
- Lifestyle ordinals: SleepQuality, StressLevel, ActivityLevel
- Demographic enums: AgeRange, Gender, CityTier
- PrimaryGoal: what the user wants out of the check
- Utility functions: utc_now(), utc_timestamp(), parse_utc_timestamp()
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Tuple

from ayur_core_lib.utils.serialization import to_json_compatible


class DoshaType(str, Enum):
    """Constitutional type in the Ayurvedic model"""

    VATA = "vata"
    PITTA = "pitta"
    KAPHA = "kapha"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


# Tie-break order when symptom tallies are equal: first listed wins.
DOSHA_PRIORITY: Tuple[DoshaType, ...] = (DoshaType.VATA, DoshaType.PITTA, DoshaType.KAPHA)


class AgeRange(str, Enum):
    AGE_18_25 = "18-25"
    AGE_26_35 = "26-35"
    AGE_36_45 = "36-45"
    AGE_46_55 = "46-55"
    AGE_56_65 = "56-65"
    AGE_65_PLUS = "65+"


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"
    PREFER_NOT_TO_SAY = "prefer_not_to_say"


class CityTier(str, Enum):
    """Locale tier; affects which lifestyle advice is practical"""

    TIER1 = "tier1"
    TIER2 = "tier2"
    TIER3 = "tier3"
    RURAL = "rural"


class SleepQuality(str, Enum):
    POOR = "poor"
    FAIR = "fair"
    GOOD = "good"
    EXCELLENT = "excellent"


class StressLevel(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    VERY_HIGH = "very_high"


class ActivityLevel(str, Enum):
    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"


class PrimaryGoal(str, Enum):
    """
    What the user wants from the health check.

    CURRENT_DISCOMFORT always routes through the confirmation gate.
    """

    PREVENTION = "prevention"
    CURRENT_DISCOMFORT = "current_discomfort"
    LONG_TERM_WELLNESS = "long_term_wellness"


class ImbalanceLevel(str, Enum):
    MILD = "mild"
    MODERATE = "moderate"
    SIGNIFICANT = "significant"


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# Utility functions for timestamp formatting
def utc_now() -> datetime:
    """Timezone-aware current time in UTC."""
    return datetime.now(timezone.utc)


def utc_timestamp() -> str:
    """Generate UTC timestamp with 'Z' suffix (e.g. "2024-01-15T14:30:00.123000Z")."""
    return to_json_compatible(utc_now())


def parse_utc_timestamp(timestamp_str: str) -> datetime:
    """Parse UTC timestamp string into timezone-aware datetime object.

    Handles '...+00:00', '...Z' and naive strings (assumed UTC).
    """
    if timestamp_str.endswith('Z'):
        dt = datetime.fromisoformat(timestamp_str[:-1])
    else:
        dt = datetime.fromisoformat(timestamp_str)
    return dt.replace(tzinfo=timezone.utc) if dt.tzinfo is None else dt
