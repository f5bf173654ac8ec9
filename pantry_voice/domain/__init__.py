"""Domain models and DTOs."""

from pantry_voice.domain.food import (
    ExpiryAssessment,
    ExpiryStatus,
    FoodCategory,
    FoodItem,
    FoodItemCreate,
    FoodItemDraft,
    StorageLocation,
)
from pantry_voice.domain.voice import (
    AutoSubmitPlan,
    IntentKind,
    OutcomeKind,
    QueryKind,
    QueryResult,
    QueryResultKind,
    SessionOutcome,
    SessionState,
    UtteranceIntent,
)


__all__ = [
    "AutoSubmitPlan",
    "ExpiryAssessment",
    "ExpiryStatus",
    "FoodCategory",
    "FoodItem",
    "FoodItemCreate",
    "FoodItemDraft",
    "IntentKind",
    "OutcomeKind",
    "QueryKind",
    "QueryResult",
    "QueryResultKind",
    "SessionOutcome",
    "SessionState",
    "StorageLocation",
    "UtteranceIntent",
]
