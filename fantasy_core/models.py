# fantasy_core/models.py
"""
Data models for the research core.

Design Decisions:
- Pydantic BaseModel for runtime validation and JSON serialization
- ResearchQuery is frozen: built once per call, never mutated
- Insight mirrors an ai_insights row; callers always get a fresh copy
- Outcome is the internal success/failure variant; it is collapsed to
  Optional[...] only at the orchestrator's public methods
"""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class ResearchCategory(str, Enum):
    INJURY = "injury"
    MATCHUP = "matchup"
    START_SIT = "start_sit"
    TRADE = "trade"
    WAIVER = "waiver"
    NEWS = "news"


class ResearchQuery(BaseModel):
    """A prompt ready to send to the research API."""
    model_config = ConfigDict(frozen=True)

    category: ResearchCategory
    subject_id: Optional[str] = None
    prompt_text: str = Field(..., min_length=1)


class ResearchResult(BaseModel):
    """
    Answer returned by the research API.

    confidence is a lexical heuristic (see research.confidence), not a
    calibrated probability.
    """
    content: str
    citations: List[str] = Field(default_factory=list)
    confidence: float = Field(..., ge=0.3, le=1.0)


class Insight(BaseModel):
    """Persisted research answer. Append-only."""
    id: int
    query_type: str
    query_text: str
    response_json: str
    confidence_score: float
    week: int = Field(..., ge=1)
    is_actionable: bool
    created_at: datetime

    @property
    def result(self) -> ResearchResult:
        return ResearchResult.model_validate_json(self.response_json)


class Player(BaseModel):
    """
    Roster entry as supplied by the fantasy-data provider.

    The provider mixes snake_case and camelCase keys depending on endpoint,
    so from_dict accepts both.
    """
    id: str
    name: str
    position: str = ""
    position_type: str = ""
    status: Optional[str] = None
    nfl_team: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Player":
        return cls(
            id=str(data.get("id", data.get("player_id", ""))),
            name=data.get("name", ""),
            position=data.get("position") or "",
            position_type=data.get("position_type", data.get("positionType")) or "",
            status=data.get("status"),
            nfl_team=data.get("nfl_team", data.get("nflTeam")) or "",
        )

    @property
    def label(self) -> str:
        return f"{self.name} ({self.position})"


class NewsItem(BaseModel):
    headline: str
    summary: Optional[str] = None


class OutcomeStatus(str, Enum):
    OK = "ok"
    DISABLED = "disabled"
    UPSTREAM_FAILURE = "upstream_failure"
    PERSISTENCE_FAILURE = "persistence_failure"


@dataclass
class Outcome(Generic[T]):
    """
    Result of a research call or a store write.

    Attributes:
        status: Which branch was taken
        value: Payload when status is OK (may be None for a no-op save)
        error: Exception describing a failure branch
    """
    status: OutcomeStatus
    value: Optional[T] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.status == OutcomeStatus.OK

    @classmethod
    def success(cls, value: Optional[T] = None) -> "Outcome[T]":
        return cls(OutcomeStatus.OK, value=value)

    @classmethod
    def disabled(cls) -> "Outcome[T]":
        return cls(OutcomeStatus.DISABLED)

    @classmethod
    def failure(cls, status: OutcomeStatus, error: Exception) -> "Outcome[T]":
        return cls(status, error=error)
