from .display import display_research_result, display_insights, display_queries

__all__ = ["display_research_result", "display_insights", "display_queries"]
