from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from fantasy_core.db.store import ACTIONABLE_THRESHOLD
from fantasy_core.models import Insight, ResearchQuery, ResearchResult

console = Console()


def _confidence_color(confidence: float) -> str:
    if confidence > ACTIONABLE_THRESHOLD:
        return "green"
    if confidence >= 0.5:
        return "yellow"
    return "red"


def display_research_result(result: ResearchResult, title: Optional[str] = None) -> None:
    """
    Display one research answer as a panel.

    Color Coding:
        - Above 0.70: GREEN border (actionable)
        - 0.50-0.70: YELLOW border
        - Below 0.50: RED border
    """
    color = _confidence_color(result.confidence)
    citations = "\n".join(f"[cyan]{i}.[/cyan] {url}" for i, url in enumerate(result.citations, 1))

    content = f"""{result.content}

[bold {color}]Confidence: {result.confidence:.2f}[/bold {color}]"""
    if citations:
        content += f"\n\n[bold]Sources:[/bold]\n{citations}"

    console.print(Panel(content, title=title or "Research", border_style=color))


def display_insights(insights: list[Insight]) -> None:
    if not insights:
        console.print("[yellow]No insights stored yet.[/yellow]")
        return

    table = Table(title="Recent Insights", show_lines=True)
    table.add_column("ID", style="cyan", width=5)
    table.add_column("Type", width=10)
    table.add_column("Week", justify="center", width=5)
    table.add_column("Conf", justify="center", width=6)
    table.add_column("Act", justify="center", width=4)
    table.add_column("Answer", max_width=70)
    table.add_column("Created", width=20)

    for insight in insights:
        color = _confidence_color(insight.confidence_score)
        answer = insight.result.content
        table.add_row(
            str(insight.id),
            insight.query_type,
            str(insight.week),
            f"[{color}]{insight.confidence_score:.2f}[/{color}]",
            "[green]✓[/green]" if insight.is_actionable else "",
            answer[:200] + ("..." if len(answer) > 200 else ""),
            insight.created_at.strftime("%Y-%m-%d %H:%M"),
        )

    console.print(table)


def display_queries(queries: list[ResearchQuery]) -> None:
    if not queries:
        console.print("[green]Roster raises no pending questions.[/green]")
        return

    table = Table(title=f"Pending Research ({len(queries)})", show_lines=True)
    table.add_column("#", style="cyan", width=3)
    table.add_column("Type", width=10)
    table.add_column("Player", width=10)
    table.add_column("Question", max_width=80)

    for idx, query in enumerate(queries, 1):
        table.add_row(str(idx), query.category.value, query.subject_id or "-", query.prompt_text)

    console.print(table)
