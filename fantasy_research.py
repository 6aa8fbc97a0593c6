#!/usr/bin/env python3
# fantasy_research.py
"""
CLI for the fantasy research core.

Usage:
    python fantasy_research.py ask "Should I start Puka Nacua this week?"
    python fantasy_research.py insights --type start_sit --limit 5
    python fantasy_research.py queries --roster roster.json --matchups matchups.json --league league.json
    python fantasy_research.py news --headline "Christian McCaffrey placed on IR"

Design:
    - Research gate comes from AI_RESEARCH_ENABLED + PERPLEXITY_API_KEY (.env)
    - Answers print as rich panels; stored insights print as a table
    - Exit code 1 when input is invalid or research is unavailable
"""
import argparse
import json
import logging
import sys

from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler

from fantasy_core.config import ResearchSettings, load_config
from fantasy_core.db.store import InsightStore, init_database
from fantasy_core.exceptions import ValidationError
from fantasy_core.orchestrator import QueryOrchestrator
from fantasy_core.reports.display import display_insights, display_queries, display_research_result
from fantasy_core.research.client import ResearchClient

load_dotenv()
console = Console()


def _load_json(path: str):
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def build_orchestrator(config_path: str) -> QueryOrchestrator:
    config = load_config(config_path)
    settings = ResearchSettings.from_env(config)
    db_path = config.get("database", {}).get("path", "fantasy.db")

    store = InsightStore(init_database(db_path))
    return QueryOrchestrator(ResearchClient(settings), store)


def main(argv=None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Fantasy football research assistant",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--config", default="config.yaml", help="Config file (default: config.yaml)")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    ask = sub.add_parser("ask", help="Ask a free-text research question")
    ask.add_argument("question")

    insights = sub.add_parser("insights", help="List stored insights")
    insights.add_argument("--type", dest="category", default=None,
                          help="Filter by category (injury, matchup, start_sit, trade, waiver, news)")
    insights.add_argument("--limit", type=int, default=10)

    queries = sub.add_parser("queries", help="Show pending questions for a roster")
    queries.add_argument("--roster", required=True, help="Roster JSON file (list of players)")
    queries.add_argument("--matchups", help="Matchups JSON file keyed by NFL team")
    queries.add_argument("--league", help="League JSON file with current_week")

    news = sub.add_parser("news", help="Fantasy context for a news headline")
    news.add_argument("--headline", required=True)
    news.add_argument("--summary", default=None)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )

    orchestrator = build_orchestrator(args.config)

    try:
        if args.command == "insights":
            display_insights(orchestrator.recent_insights(args.category, args.limit))
            return 0

        if args.command == "queries":
            roster = _load_json(args.roster)
            matchups = _load_json(args.matchups) if args.matchups else {}
            league = _load_json(args.league) if args.league else {}
            display_queries(orchestrator.contextual_queries(roster, matchups, league))
            return 0

        if args.command == "ask":
            result = orchestrator.ask(args.question)
            title = "Research"
        else:
            result = orchestrator.breaking_news_context({"headline": args.headline, "summary": args.summary})
            title = args.headline
    except (ValidationError, FileNotFoundError, json.JSONDecodeError) as e:
        console.print(f"[red]Error: {e}[/red]")
        return 1

    if result is None:
        console.print("[red]AI research unavailable. Check AI_RESEARCH_ENABLED and PERPLEXITY_API_KEY.[/red]")
        return 1

    display_research_result(result, title=title)
    return 0


if __name__ == "__main__":
    sys.exit(main())
