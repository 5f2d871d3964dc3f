from .engine import AnalyticsEngine
from .store import InMemoryWardrobeStore, WardrobeStore
from .sql_store import SqlWardrobeStore
from .types import (
    GoalType,
    SustainabilityGoal,
    WardrobeItem,
    WardrobeSnapshot,
    WearLog,
)

__all__ = [
    "AnalyticsEngine",
    "InMemoryWardrobeStore",
    "WardrobeStore",
    "SqlWardrobeStore",
    "GoalType",
    "SustainabilityGoal",
    "WardrobeItem",
    "WardrobeSnapshot",
    "WearLog",
]
