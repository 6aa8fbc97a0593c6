# Fantasy Research Core Library
# Main entry point: from fantasy_core.orchestrator import QueryOrchestrator

from .config import load_config, ResearchSettings

from .models import (
    ResearchCategory,
    ResearchQuery,
    ResearchResult,
    Insight,
    Player,
    NewsItem,
    Outcome,
    OutcomeStatus,
)

from .orchestrator import (
    QueryOrchestrator,
    identify_roster_needs,
    generate_contextual_queries,
)

__all__ = [
    # Main entry point
    "QueryOrchestrator",
    "load_config",
    "ResearchSettings",
    # Models
    "ResearchCategory",
    "ResearchQuery",
    "ResearchResult",
    "Insight",
    "Player",
    "NewsItem",
    "Outcome",
    "OutcomeStatus",
    # Helpers
    "identify_roster_needs",
    "generate_contextual_queries",
]
