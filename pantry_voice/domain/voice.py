"""Voice interpretation domain models: intents, query results and session outcomes."""

from enum import StrEnum

from pydantic import BaseModel, Field

from pantry_voice.core.errors import ErrorResponse
from pantry_voice.domain.food import FoodItemDraft


class IntentKind(StrEnum):
    """Purpose of an utterance."""

    QUERY = "query"
    COMMAND = "command"


class QueryKind(StrEnum):
    """Which expiry window a query asks about."""

    TODAY = "today"
    TOMORROW = "tomorrow"
    GENERAL = "general"


class UtteranceIntent(BaseModel):
    """Classified intent. Created per utterance and consumed once."""

    kind: IntentKind
    query_kind: QueryKind | None = Field(default=None, description="Set only for QUERY intents")

    @property
    def is_query(self) -> bool:
        return self.kind == IntentKind.QUERY


class QueryResultKind(StrEnum):
    """Outcome of answering an inventory query."""

    EXPIRY_CHECK = "expiry_check"
    ERROR = "error"


class QueryResult(BaseModel):
    """Natural-language answer to an inventory query."""

    kind: QueryResultKind
    message: str
    summary: str


class AutoSubmitPlan(BaseModel):
    """Whether and when a draft is handed to the persistence collaborator."""

    eligible: bool
    delay_seconds: float | None = Field(default=None, description="Set only when eligible")


class SessionState(StrEnum):
    """Listening session lifecycle state."""

    IDLE = "IDLE"
    LISTENING = "LISTENING"
    PROCESSING = "PROCESSING"


class OutcomeKind(StrEnum):
    """What a listening session emitted to its caller."""

    QUERY_RESULT = "query_result"
    DRAFT = "draft"
    UNRECOGNIZED = "unrecognized"
    ERROR = "error"


class SessionOutcome(BaseModel):
    """Single result emitted at the end of a listening session or interpretation."""

    kind: OutcomeKind
    transcript: str | None = None
    intent: UtteranceIntent | None = None
    query_result: QueryResult | None = None
    draft: FoodItemDraft | None = None
    auto_submit: AutoSubmitPlan | None = None
    error: ErrorResponse | None = None
