"""Tests for configuration loading and the research gate."""
import pytest

from fantasy_core.config import (
    DEFAULT_CONFIG,
    PLACEHOLDER_API_KEY,
    ResearchSettings,
    load_config,
)
from fantasy_core.exceptions import ConfigurationError

RESEARCH_ENV = (
    "AI_RESEARCH_ENABLED",
    "PERPLEXITY_API_KEY",
    "PERPLEXITY_MODEL",
    "PERPLEXITY_MAX_TOKENS",
    "PERPLEXITY_TEMPERATURE",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in RESEARCH_ENV:
        monkeypatch.delenv(name, raising=False)


def test_load_config_missing_file_uses_defaults(tmp_path):
    assert load_config(str(tmp_path / "nope.yaml")) == DEFAULT_CONFIG


def test_load_config_reads_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("research:\n  enabled: true\n  model: sonar-pro\n")

    config = load_config(str(path))
    assert config["research"]["model"] == "sonar-pro"


def test_enabled_with_flag_and_key(monkeypatch):
    monkeypatch.setenv("AI_RESEARCH_ENABLED", "true")
    monkeypatch.setenv("PERPLEXITY_API_KEY", "pplx-abc")

    settings = ResearchSettings.from_env()
    assert settings.enabled is True


@pytest.mark.parametrize("flag,key", [
    ("true", ""),
    ("true", PLACEHOLDER_API_KEY),
    ("false", "pplx-abc"),
    ("yes", "pplx-abc"),
])
def test_gate_closed(monkeypatch, flag, key):
    monkeypatch.setenv("AI_RESEARCH_ENABLED", flag)
    monkeypatch.setenv("PERPLEXITY_API_KEY", key)

    assert ResearchSettings.from_env().enabled is False


def test_env_flag_overrides_yaml(monkeypatch):
    monkeypatch.setenv("AI_RESEARCH_ENABLED", "false")
    monkeypatch.setenv("PERPLEXITY_API_KEY", "pplx-abc")
    config = {"research": {"enabled": True}}

    assert ResearchSettings.from_env(config).enabled is False


def test_yaml_flag_used_without_env(monkeypatch):
    monkeypatch.setenv("PERPLEXITY_API_KEY", "pplx-abc")
    config = {"research": {"enabled": True, "search_domains": ["espn.com"]}}

    settings = ResearchSettings.from_env(config)
    assert settings.enabled is True
    assert settings.search_domains == ("espn.com",)


def test_numeric_env_overrides(monkeypatch):
    monkeypatch.setenv("PERPLEXITY_MODEL", "sonar-pro")
    monkeypatch.setenv("PERPLEXITY_MAX_TOKENS", "500")
    monkeypatch.setenv("PERPLEXITY_TEMPERATURE", "0.5")

    settings = ResearchSettings.from_env()
    assert settings.model == "sonar-pro"
    assert settings.max_tokens == 500
    assert settings.temperature == pytest.approx(0.5)


def test_defaults():
    settings = ResearchSettings.from_env()
    assert settings.max_tokens == 1000
    assert settings.temperature == pytest.approx(0.2)
    assert settings.recency_filter == "week"
    assert settings.max_retries == 0
    assert settings.enabled is False


def test_bad_number_raises_configuration_error(monkeypatch):
    monkeypatch.setenv("PERPLEXITY_MAX_TOKENS", "lots")

    with pytest.raises(ConfigurationError):
        ResearchSettings.from_env()
