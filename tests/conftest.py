"""
Pytest fixtures and configuration.

- Fixtures provide provider-shaped roster data
- The research SDK is the only thing mocked; sqlite runs in memory
- Each test should be independent and fast
"""
import sqlite3
from types import SimpleNamespace
from typing import Any
from unittest.mock import MagicMock

import pytest

from fantasy_core.config import ResearchSettings
from fantasy_core.db.store import InsightStore, init_database
from fantasy_core.orchestrator import QueryOrchestrator
from fantasy_core.research.client import ResearchClient


# =============================================================================
# ROSTER FIXTURES
# =============================================================================

@pytest.fixture
def sample_roster() -> list[dict[str, Any]]:
    """Ten-man roster as returned by the fantasy-data provider."""
    return [
        {"id": "p1", "name": "Jalen Hurts", "position": "QB", "position_type": "starter", "status": "Active", "nfl_team": "PHI"},
        {"id": "p2", "name": "Bijan Robinson", "position": "RB", "position_type": "starter", "status": "healthy", "nfl_team": "ATL"},
        {"id": "p3", "name": "Kyren Williams", "position": "RB", "position_type": "starter", "status": "Questionable", "nfl_team": "LAR"},
        {"id": "p4", "name": "Puka Nacua", "position": "WR", "position_type": "starter", "status": None, "nfl_team": "LAR"},
        {"id": "p5", "name": "Garrett Wilson", "position": "WR", "position_type": "starter", "status": "Active", "nfl_team": "NYJ"},
        {"id": "p6", "name": "Sam LaPorta", "position": "TE", "position_type": "starter", "status": "Active", "nfl_team": "DET"},
        {"id": "p7", "name": "Jaylen Waddle", "position": "WR", "position_type": "starter", "status": "Out", "nfl_team": "MIA"},
        {"id": "p8", "name": "Zack Moss", "position": "RB", "position_type": "bench", "status": "Active", "nfl_team": "CIN"},
        {"id": "p9", "name": "Rashid Shaheed", "position": "WR", "position_type": "bench", "status": "Active", "nfl_team": "NO"},
        {"id": "p10", "name": "Justin Tucker", "position": "K", "position_type": "bench", "status": "Active", "nfl_team": "BAL"},
    ]


@pytest.fixture
def sample_matchups() -> dict[str, Any]:
    """Matchups keyed by NFL team."""
    return {
        "PHI": {"opponent": "DAL"},
        "LAR": {"opponent": "SF"},
        "DET": {"opponent": "GB"},
        "MIA": {"opponent": "BUF"},
    }


@pytest.fixture
def sample_league() -> dict[str, Any]:
    return {"current_week": 7}


@pytest.fixture
def make_players():
    """Factory for same-position provider entries (all Active, team FA)."""
    def _make(names: list[str], position: str = "WR", position_type: str = "bench") -> list[dict[str, Any]]:
        return [
            {"id": f"x{i}", "name": name, "position": position, "position_type": position_type, "status": "Active", "nfl_team": "FA"}
            for i, name in enumerate(names)
        ]
    return _make


# =============================================================================
# RESEARCH CLIENT FIXTURES
# =============================================================================

@pytest.fixture
def enabled_settings() -> ResearchSettings:
    return ResearchSettings(api_key="pplx-test-key", research_enabled=True)


@pytest.fixture
def disabled_settings() -> ResearchSettings:
    return ResearchSettings(api_key="", research_enabled=False)


def _completion(content: Any, citations: Any = None) -> SimpleNamespace:
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))],
        citations=citations if citations is not None else [],
        usage=SimpleNamespace(prompt_tokens=120, completion_tokens=340),
    )


@pytest.fixture
def make_completion():
    """Factory for chat completions shaped like the OpenAI SDK response object."""
    return _completion


@pytest.fixture
def mock_llm_client():
    """OpenAI-compatible client returning a confident answer with citations."""
    client = MagicMock()
    client.chat.completions.create.return_value = _completion(
        "Start Puka Nacua. He is definitely the better play against SF.",
        citations=["https://www.espn.com/fantasy/story", "https://www.fantasypros.com/nfl/"],
    )
    return client


# =============================================================================
# STORE / ORCHESTRATOR FIXTURES
# =============================================================================

@pytest.fixture
def memory_conn():
    conn = init_database(":memory:")
    yield conn
    conn.close()


@pytest.fixture
def store(memory_conn) -> InsightStore:
    return InsightStore(memory_conn)


@pytest.fixture
def orchestrator(enabled_settings, mock_llm_client, store) -> QueryOrchestrator:
    client = ResearchClient(enabled_settings, llm_client=mock_llm_client)
    return QueryOrchestrator(client, store)


@pytest.fixture
def count_insights():
    """Counts ai_insights rows on a connection."""
    def _count(conn: sqlite3.Connection) -> int:
        return conn.execute("SELECT COUNT(*) FROM ai_insights").fetchone()[0]
    return _count
