"""
Research infrastructure.

Components:
- ResearchClient: one question/answer round-trip against the research API
- score_confidence: lexical trust score for an answer
- prompts: one pure builder per research category
"""
from fantasy_core.research.client import ResearchClient, SYSTEM_PROMPT
from fantasy_core.research.confidence import score_confidence

__all__ = ["ResearchClient", "SYSTEM_PROMPT", "score_confidence"]
