"""
Research Client.

Sends one question to the Perplexity chat/completions API (OpenAI-compatible)
and returns the scored answer.

Design rationale:
- Gate is resolved once from injected ResearchSettings; a disabled client
  never builds an SDK client and never touches the network
- Search is pinned to a domain allow-list and a one-week recency window so
  answers come from current, high-trust fantasy sources
- Every upstream problem (non-2xx, timeout, connection error, empty body)
  becomes an UPSTREAM_FAILURE outcome instead of an exception

Usage:
    client = ResearchClient(ResearchSettings.from_env(load_config()))
    result = client.perform_research("Is Bijan Robinson a must-start this week?")
"""
import logging
from typing import Any, Optional

import openai
from openai import OpenAI

from fantasy_core.config import ResearchSettings
from fantasy_core.exceptions import UpstreamError
from fantasy_core.models import Outcome, OutcomeStatus, ResearchResult
from fantasy_core.research.confidence import score_confidence

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a fantasy football expert analyst. Provide detailed, actionable "
    "insights based on current data and trends. Be specific with "
    "recommendations and confidence levels."
)


class ResearchClient:
    """
    Single question/answer round-trip against the research API.

    States: enabled or disabled, fixed at construction.
    """

    def __init__(self, settings: ResearchSettings, llm_client: Optional[Any] = None):
        """
        Args:
            settings: Resolved research settings (gate, model, search limits)
            llm_client: Pre-built OpenAI-compatible client (optional, for tests)
        """
        self.settings = settings
        self.enabled = settings.enabled

        if not self.enabled:
            self.llm_client = None
        elif llm_client is not None:
            self.llm_client = llm_client
        else:
            self.llm_client = OpenAI(
                api_key=settings.api_key,
                base_url=settings.base_url,
                timeout=settings.request_timeout,
                max_retries=settings.max_retries,
            )

    def perform_research(self, query: str) -> Optional[ResearchResult]:
        """Ask one question. None means disabled or failed."""
        return self.research(query).value

    def research(self, query: str) -> Outcome[ResearchResult]:
        """
        Ask one question and report which branch was taken.

        Args:
            query: Natural-language question for the analyst

        Returns:
            Outcome with the scored ResearchResult on success, or a
            DISABLED / UPSTREAM_FAILURE status
        """
        if not self.enabled:
            logger.info("Research API is not enabled or configured; skipping query")
            return Outcome.disabled()

        try:
            response = self.llm_client.chat.completions.create(
                model=self.settings.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": query},
                ],
                max_tokens=self.settings.max_tokens,
                temperature=self.settings.temperature,
                top_p=self.settings.top_p,
                extra_body={
                    "return_citations": True,
                    "search_domain_filter": list(self.settings.search_domains),
                    "search_recency_filter": self.settings.recency_filter,
                },
            )
        except openai.APIError as e:
            logger.error(f"Research API error: {e}", exc_info=True)
            return Outcome.failure(OutcomeStatus.UPSTREAM_FAILURE, UpstreamError(str(e)))

        try:
            result = self._parse_response(response)
        except UpstreamError as e:
            logger.error(f"Research API returned an unusable response: {e}")
            return Outcome.failure(OutcomeStatus.UPSTREAM_FAILURE, e)

        usage = getattr(response, "usage", None)
        if usage is not None:
            logger.debug(
                f"Research usage: model={self.settings.model} "
                f"prompt_tokens={getattr(usage, 'prompt_tokens', '?')} "
                f"completion_tokens={getattr(usage, 'completion_tokens', '?')}"
            )

        return Outcome.success(result)

    def _parse_response(self, response: Any) -> ResearchResult:
        """
        Pull answer text and citations out of a chat completion.

        Perplexity returns citations as a top-level extra field, which the
        OpenAI SDK exposes as a plain attribute.
        """
        try:
            content = response.choices[0].message.content
        except (AttributeError, IndexError, TypeError) as e:
            raise UpstreamError(f"Malformed completion body: {e}") from e

        if not isinstance(content, str) or not content.strip():
            raise UpstreamError("Completion has no answer content")

        citations = getattr(response, "citations", None) or []
        if not isinstance(citations, list):
            citations = []

        return ResearchResult(
            content=content,
            citations=[str(c) for c in citations],
            confidence=score_confidence(content),
        )
