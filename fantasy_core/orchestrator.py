"""
Query Orchestrator.

Turns structured fantasy state (roster, matchups, trade proposals, waiver
pool, news) into research prompts, runs them through ResearchClient, and
records the answers in InsightStore.

Pipeline per use case:
1. Validate required inputs (raises ValidationError before any network call)
2. Build the category prompt (research.prompts)
3. Research: client.research() -> Outcome
4. Persist on success (best-effort; a failed write keeps the answer)
5. Return the ResearchResult, or None when research was disabled or failed

Roster entries may be plain provider dicts or Player models.
"""
import logging
from collections import Counter
from typing import Any, Iterable, Mapping, Optional, Sequence, Union

from fantasy_core.db.store import InsightStore
from fantasy_core.exceptions import ValidationError
from fantasy_core.models import (
    Insight,
    NewsItem,
    Outcome,
    Player,
    ResearchQuery,
    ResearchResult,
)
from fantasy_core.research import prompts
from fantasy_core.research.client import ResearchClient

logger = logging.getLogger(__name__)

PlayerLike = Union[Player, Mapping[str, Any]]

HEALTHY_STATUSES = frozenset({"healthy", "active"})
FLEX_POSITIONS = frozenset({"RB", "WR", "TE"})
MAX_MATCHUP_STARTERS = 5
MAX_FLEX_CANDIDATES = 3
MAX_WAIVER_CANDIDATES = 10
FALLBACK_NEED = "Best player available"

# (position, minimum count, need label), checked in this order
POSITION_MINIMUMS: tuple[tuple[str, int, str], ...] = (
    ("RB", 5, "RB depth"),
    ("WR", 5, "WR depth"),
    ("TE", 2, "TE backup"),
    ("QB", 2, "QB backup"),
)


def _to_players(entries: Optional[Iterable[PlayerLike]]) -> list[Player]:
    return [e if isinstance(e, Player) else Player.from_dict(dict(e)) for e in entries or []]


def _require(players: Sequence[Player], label: str) -> None:
    if not players:
        raise ValidationError(f"{label} must contain at least one player")


def identify_roster_needs(roster: Iterable[PlayerLike]) -> list[str]:
    """
    Positional shortfalls for a roster snapshot.

    Args:
        roster: Roster entries

    Returns:
        Ordered need labels; ["Best player available"] when nothing is short
    """
    counts = Counter(p.position for p in _to_players(roster))
    needs = [label for position, minimum, label in POSITION_MINIMUMS if counts[position] < minimum]
    return needs or [FALLBACK_NEED]


def generate_contextual_queries(
    roster: Iterable[PlayerLike],
    matchups: Mapping[str, Any],
    league: Mapping[str, Any],
) -> list[ResearchQuery]:
    """
    Build the batch of pending questions a roster currently raises.

    Order:
    1. Injury update per player whose status is set and not healthy/active
    2. Defense matchup per starter (first 5 starters) with a matchup entry
    3. One flex comparison when 2+ bench RB/WR/TE exist (up to 3 compared)

    Nothing is sent to the research API here.
    """
    players = _to_players(roster)
    matchups = matchups or {}
    league = league or {}
    week = league.get("current_week", league.get("currentWeek")) or 1
    queries: list[ResearchQuery] = []

    for player in players:
        if player.status and player.status.lower() not in HEALTHY_STATUSES:
            queries.append(prompts.build_injury_query(player, week))

    starters = [p for p in players if p.position_type == "starter"]
    for player in starters[:MAX_MATCHUP_STARTERS]:
        matchup = matchups.get(player.nfl_team)
        if matchup:
            opponent = matchup.get("opponent", "Unknown") if isinstance(matchup, Mapping) else str(matchup)
            queries.append(prompts.build_matchup_query(player, opponent, week))

    flex_candidates = [
        p for p in players
        if p.position in FLEX_POSITIONS and p.position_type == "bench"
    ]
    if len(flex_candidates) >= 2:
        queries.append(prompts.build_flex_query(flex_candidates[:MAX_FLEX_CANDIDATES], week))

    return queries


class QueryOrchestrator:
    """
    Coordinates ResearchClient, confidence scoring and InsightStore per use case.

    Stateless between calls: concurrent operations share only the store.
    """

    def __init__(self, client: ResearchClient, store: InsightStore):
        self.client = client
        self.store = store

    def ask(self, question: str) -> Optional[ResearchResult]:
        """Free-text research. Not persisted."""
        if not question or not question.strip():
            raise ValidationError("question is required")
        return self.client.research(question).value

    def start_sit(
        self,
        starters: Sequence[PlayerLike],
        bench: Optional[Sequence[PlayerLike]] = None,
    ) -> Optional[ResearchResult]:
        starter_players = _to_players(starters)
        _require(starter_players, "starters")

        query = prompts.build_start_sit_query(starter_players, _to_players(bench))
        return self.run(query).value

    def evaluate_trade(
        self,
        giving: Sequence[PlayerLike],
        receiving: Sequence[PlayerLike],
        team_needs: Optional[Sequence[str]] = None,
    ) -> Optional[ResearchResult]:
        giving_players = _to_players(giving)
        receiving_players = _to_players(receiving)
        _require(giving_players, "giving")
        _require(receiving_players, "receiving")

        query = prompts.build_trade_query(giving_players, receiving_players, list(team_needs or []))
        return self.run(query).value

    def waiver_recommendations(
        self,
        roster: Sequence[PlayerLike],
        available: Sequence[PlayerLike],
        faab_budget: Optional[float] = None,
    ) -> Optional[ResearchResult]:
        roster_players = _to_players(roster)
        available_players = _to_players(available)
        _require(available_players, "available")

        query = prompts.build_waiver_query(
            available_players[:MAX_WAIVER_CANDIDATES],
            identify_roster_needs(roster_players),
            faab_budget,
        )
        return self.run(query).value

    def breaking_news_context(self, news_item: Union[NewsItem, Mapping[str, Any]]) -> Optional[ResearchResult]:
        """Read-through: the answer is returned but not stored."""
        if not isinstance(news_item, NewsItem):
            news_item = NewsItem(
                headline=(news_item or {}).get("headline") or "",
                summary=(news_item or {}).get("summary"),
            )
        if not news_item.headline.strip():
            raise ValidationError("news item headline is required")

        query = prompts.build_news_query(news_item)
        return self.run(query, persist=False).value

    def contextual_queries(
        self,
        roster: Iterable[PlayerLike],
        matchups: Mapping[str, Any],
        league: Mapping[str, Any],
    ) -> list[ResearchQuery]:
        return generate_contextual_queries(roster, matchups, league)

    def recent_insights(self, category: Optional[str] = None, limit: int = 10) -> list[Insight]:
        return self.store.recent_insights(category, limit)

    def run(self, query: ResearchQuery, persist: bool = True) -> Outcome[ResearchResult]:
        """
        Research one query and store the answer.

        The returned outcome is the research outcome: a persistence failure
        is logged by the store and does not change it.
        """
        outcome = self.client.research(query.prompt_text)
        if not outcome.ok:
            logger.info(f"No {query.category.value} result: {outcome.status.value}")
            return outcome

        if persist:
            saved = self.store.save(query.category, query.prompt_text, outcome.value)
            if not saved.ok:
                logger.warning(f"{query.category.value} answer delivered without being stored")

        return outcome
