import os
from dataclasses import dataclass
from typing import Any, Optional

import yaml
from rich.console import Console

from fantasy_core.exceptions import ConfigurationError

console = Console()

PLACEHOLDER_API_KEY = "your-perplexity-api-key"

DEFAULT_SEARCH_DOMAINS: tuple[str, ...] = (
    "espn.com",
    "nfl.com",
    "yahoo.com",
    "fantasypros.com",
    "rotoworld.com",
)

DEFAULT_CONFIG: dict[str, Any] = {
    "research": {
        "enabled": False,
        "base_url": "https://api.perplexity.ai",
        "model": "sonar",
        "max_tokens": 1000,
        "temperature": 0.2,
        "top_p": 0.9,
        "request_timeout": 30.0,
        "max_retries": 0,
        "search_domains": list(DEFAULT_SEARCH_DOMAINS),
        "recency_filter": "week",
    },
    "database": {"path": "fantasy.db"},
}


def load_config(config_path: str = "config.yaml") -> dict[str, Any]:
    """
    From config.yaml

    Args:
        config_path: Path to config file (default: config.yaml)

    Returns:
        Configuration dictionary
    """
    try:
        with open(config_path, "r") as f:
            return yaml.safe_load(f) or DEFAULT_CONFIG
    except FileNotFoundError:
        console.print(f"[yellow]Warning: {config_path} not found. Using default config.[/yellow]")
        return DEFAULT_CONFIG


def get_api_keys() -> dict[str, str]:
    return {
        "perplexity": os.getenv("PERPLEXITY_API_KEY", ""),
    }


def _env_flag(name: str) -> Optional[bool]:
    raw = os.getenv(name)
    if raw is None:
        return None
    return raw.strip().lower() == "true"


def _env_number(name: str, cast: type, default: Any) -> Any:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return cast(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a {cast.__name__}, got {raw!r}") from e


@dataclass(frozen=True)
class ResearchSettings:
    """
    Research API settings, resolved once and injected into ResearchClient.

    Environment variables override config.yaml values, matching how the
    deployment sets AI_RESEARCH_ENABLED and PERPLEXITY_* on the host.
    """

    api_key: str = ""
    research_enabled: bool = False
    base_url: str = "https://api.perplexity.ai"
    model: str = "sonar"
    max_tokens: int = 1000
    temperature: float = 0.2
    top_p: float = 0.9
    request_timeout: float = 30.0
    max_retries: int = 0
    search_domains: tuple[str, ...] = DEFAULT_SEARCH_DOMAINS
    recency_filter: str = "week"

    @property
    def enabled(self) -> bool:
        """Gate: explicit enable flag plus a real (non-placeholder) key."""
        return (
            self.research_enabled
            and bool(self.api_key)
            and self.api_key != PLACEHOLDER_API_KEY
        )

    @classmethod
    def from_env(cls, config: Optional[dict[str, Any]] = None) -> "ResearchSettings":
        section = (config or DEFAULT_CONFIG).get("research", {})
        defaults = cls()

        enabled_flag = _env_flag("AI_RESEARCH_ENABLED")
        if enabled_flag is None:
            enabled_flag = bool(section.get("enabled", defaults.research_enabled))

        return cls(
            api_key=get_api_keys()["perplexity"],
            research_enabled=enabled_flag,
            base_url=section.get("base_url", defaults.base_url),
            model=os.getenv("PERPLEXITY_MODEL") or section.get("model", defaults.model),
            max_tokens=_env_number(
                "PERPLEXITY_MAX_TOKENS", int, section.get("max_tokens", defaults.max_tokens)
            ),
            temperature=_env_number(
                "PERPLEXITY_TEMPERATURE", float, section.get("temperature", defaults.temperature)
            ),
            top_p=section.get("top_p", defaults.top_p),
            request_timeout=section.get("request_timeout", defaults.request_timeout),
            max_retries=section.get("max_retries", defaults.max_retries),
            search_domains=tuple(section.get("search_domains", defaults.search_domains)),
            recency_filter=section.get("recency_filter", defaults.recency_filter),
        )
