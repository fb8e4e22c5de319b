import pytest

from ayur_core_lib.analytics.counters import InMemoryCounterSink
from ayur_core_lib.core.aggregator import CaseAggregator
from ayur_core_lib.models.case import UserContext
from ayur_core_lib.models.common import (
    ActivityLevel,
    AgeRange,
    CityTier,
    PrimaryGoal,
    SleepQuality,
    StressLevel,
)
from ayur_core_lib.storage.memory import InMemoryCaseStore


def make_context(**overrides) -> UserContext:
    """Intake answers used across tests: good sleep, moderate stress, light activity."""
    values = dict(
        age_range=AgeRange.AGE_26_35,
        city_tier=CityTier.TIER1,
        sleep_quality=SleepQuality.GOOD,
        stress_level=StressLevel.MODERATE,
        activity_level=ActivityLevel.LIGHT,
        primary_goal=PrimaryGoal.PREVENTION,
    )
    values.update(overrides)
    return UserContext(**values)


@pytest.fixture
def user_context():
    return make_context()


@pytest.fixture
def discomfort_context():
    return make_context(primary_goal=PrimaryGoal.CURRENT_DISCOMFORT)


@pytest.fixture
def store():
    return InMemoryCaseStore()


@pytest.fixture
def counters():
    return InMemoryCounterSink()


@pytest.fixture
def aggregator(store, counters):
    return CaseAggregator(store=store, counters=counters)


@pytest.fixture
def context_payload():
    """JSON form of make_context(), as an HTTP client would send it."""
    return {
        "age_range": "26-35",
        "city_tier": "tier1",
        "sleep_quality": "good",
        "stress_level": "moderate",
        "activity_level": "light",
        "primary_goal": "prevention",
    }
