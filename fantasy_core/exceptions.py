"""
Custom exceptions for the fantasy research core.

ValidationError is raised to callers. UpstreamError and PersistenceError are
carried inside failure outcomes and never cross the orchestrator boundary.
"""


class FantasyResearchError(Exception):
    """Base exception for fantasy research errors."""
    pass


class ValidationError(FantasyResearchError):
    """Caller supplied missing or empty required input."""
    pass


class UpstreamError(FantasyResearchError):
    """Research API failed, timed out, or returned an unusable body."""
    pass


class PersistenceError(FantasyResearchError):
    """Insight store was unreachable or rejected a write."""
    pass


class ConfigurationError(FantasyResearchError):
    """A configuration value could not be parsed."""
    pass
