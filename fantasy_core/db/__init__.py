from .store import (
    init_database,
    InsightStore,
    ACTIONABLE_THRESHOLD,
)

__all__ = [
    "init_database",
    "InsightStore",
    "ACTIONABLE_THRESHOLD",
]
