"""
Prompt builders, one per research category.

Each builder is a pure function that interpolates roster state into a fixed
template and returns a ResearchQuery.
"""
from typing import Optional, Sequence

from fantasy_core.models import NewsItem, Player, ResearchCategory, ResearchQuery

INJURY_PROMPT = (
    "What is the latest injury update for {name} of the {team}? Include practice "
    "participation, expected playing time, and fantasy impact for Week {week}. "
    "Provide a confidence score (0-100) for them playing."
)

MATCHUP_PROMPT = (
    "Analyze {name} ({position}) vs {opponent} defense in Week {week}. Consider: "
    "1) Defense ranking vs {position}, 2) Recent performance trends, "
    "3) Weather conditions, 4) Historical performance in similar matchups. "
    "Provide specific point projection and start/sit recommendation."
)

FLEX_PROMPT = (
    "Compare these flex options for Week {week}: {options}. Consider matchups, "
    "recent usage, and scoring upside. Rank them and provide confidence scores."
)

START_SIT_PROMPT = """Analyze my lineup for this week:
STARTERS: {starters}
BENCH: {bench}

Provide:
1. Any recommended lineup changes with reasoning
2. Confidence score for current lineup (0-100)
3. Top 3 risky starts and safe alternatives
4. Ceiling play vs floor play recommendations
5. Weather or game script concerns"""

TRADE_PROMPT = """Evaluate this trade proposal:
GIVING: {giving}
RECEIVING: {receiving}

My team needs: {needs}

Consider:
1. Rest of season value and schedule
2. Injury history and current health
3. Team situation and usage trends
4. Impact on my roster construction
5. Fair market value assessment

Provide:
- Trade grade (A-F)
- Win probability impact
- Alternative counter-offers if declining
- Long-term vs short-term value"""

WAIVER_PROMPT = """Recommend waiver wire pickups from these available players:
{available}

My roster needs: {needs}
{budget_line}
Provide:
1. Top 3 priority adds with reasoning
2. Sleeper picks with upside
3. Suggested drops from my roster
4. FAAB bid recommendations (if applicable)
5. Stash candidates for playoffs"""

NEWS_PROMPT = """Provide context and fantasy impact for this news:
"{headline}"
{summary_line}
Include:
1. Immediate fantasy impact (this week)
2. Rest of season implications
3. Beneficiaries of this news
4. Required roster moves
5. Waiver wire priorities"""


def build_injury_query(player: Player, week: int) -> ResearchQuery:
    return ResearchQuery(
        category=ResearchCategory.INJURY,
        subject_id=player.id,
        prompt_text=INJURY_PROMPT.format(name=player.name, team=player.nfl_team, week=week),
    )


def build_matchup_query(player: Player, opponent: str, week: int) -> ResearchQuery:
    return ResearchQuery(
        category=ResearchCategory.MATCHUP,
        subject_id=player.id,
        prompt_text=MATCHUP_PROMPT.format(
            name=player.name,
            position=player.position,
            opponent=opponent,
            week=week,
        ),
    )


def build_flex_query(candidates: Sequence[Player], week: int) -> ResearchQuery:
    options = ", ".join(p.name for p in candidates)
    return ResearchQuery(
        category=ResearchCategory.START_SIT,
        prompt_text=FLEX_PROMPT.format(week=week, options=options),
    )


def build_start_sit_query(starters: Sequence[Player], bench: Sequence[Player]) -> ResearchQuery:
    return ResearchQuery(
        category=ResearchCategory.START_SIT,
        prompt_text=START_SIT_PROMPT.format(
            starters=", ".join(p.label for p in starters),
            bench=", ".join(p.label for p in bench) or "None",
        ),
    )


def build_trade_query(
    giving: Sequence[Player],
    receiving: Sequence[Player],
    team_needs: Sequence[str],
) -> ResearchQuery:
    return ResearchQuery(
        category=ResearchCategory.TRADE,
        prompt_text=TRADE_PROMPT.format(
            giving=", ".join(p.name for p in giving),
            receiving=", ".join(p.name for p in receiving),
            needs=", ".join(team_needs) or "None specified",
        ),
    )


def build_waiver_query(
    available: Sequence[Player],
    roster_needs: Sequence[str],
    faab_budget: Optional[float] = None,
) -> ResearchQuery:
    """
    Waiver prompt. Caller is responsible for trimming the pool; the budget
    line only appears when a FAAB budget was supplied.
    """
    budget_line = f"FAAB Budget remaining: ${faab_budget:g}\n" if faab_budget is not None else ""
    return ResearchQuery(
        category=ResearchCategory.WAIVER,
        prompt_text=WAIVER_PROMPT.format(
            available=", ".join(p.name for p in available),
            needs=", ".join(roster_needs),
            budget_line=budget_line,
        ),
    )


def build_news_query(news_item: NewsItem) -> ResearchQuery:
    summary_line = f"Summary: {news_item.summary}\n" if news_item.summary else ""
    return ResearchQuery(
        category=ResearchCategory.NEWS,
        prompt_text=NEWS_PROMPT.format(headline=news_item.headline, summary_line=summary_line),
    )
