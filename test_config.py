#!/usr/bin/env python3
"""
Test configuration loading and validation.
"""

import pytest
import yaml

from tavily_research.config import Configuration


def write_config(tmp_path, data) -> str:
    path = tmp_path / "config.yaml"
    path.write_text(yaml.dump(data))
    return str(path)


VALID_RESEARCH = {
    "url": "https://api.tavily.com/research",
    "model": "pro",
    "http_client": {
        "connect_timeout": 5,
        "read_timeout": 120.0,
        "write_timeout": 5,
        "pool_timeout": 5,
    },
}


def test_packaged_config_loads():
    """Test that the bundled config.yaml is valid."""
    config = Configuration()
    research = config.get_research_config()
    assert research["url"] == "https://api.tavily.com/research"
    assert research["http_client"]["read_timeout"] > 0
    assert config.get_logging_config()["level"] == "INFO"


def test_custom_config_path(tmp_path):
    """Test loading an alternate YAML file."""
    config = Configuration(write_config(tmp_path, {"research": VALID_RESEARCH}))
    assert config.get_research_config()["model"] == "pro"
    assert config.get_logging_config() == {}


def test_non_mapping_config_rejected(tmp_path):
    """Test that a YAML list is not accepted as configuration."""
    with pytest.raises(ValueError, match="Config file must be YAML dict"):
        Configuration(write_config(tmp_path, ["a", "b"]))


def test_missing_timeout_requires_explicit_config(tmp_path):
    """Test that every HTTP timeout must be configured."""
    research = {**VALID_RESEARCH, "http_client": {"connect_timeout": 5}}
    config = Configuration(write_config(tmp_path, {"research": research}))

    with pytest.raises(ValueError, match="read_timeout must be explicitly configured"):
        config.get_research_config()


def test_non_positive_timeout_rejected(tmp_path):
    """Test that timeouts must be positive numbers."""
    http_client = {**VALID_RESEARCH["http_client"], "pool_timeout": 0}
    research = {**VALID_RESEARCH, "http_client": http_client}
    config = Configuration(write_config(tmp_path, {"research": research}))

    with pytest.raises(ValueError, match="pool_timeout must be a positive number"):
        config.get_research_config()


def test_api_key_from_environment(monkeypatch):
    """Test reading the API key from the environment."""
    monkeypatch.setenv("TAVILY_API_KEY", "tvly-123")
    assert Configuration().tavily_api_key == "tvly-123"


def test_missing_api_key(monkeypatch):
    """Test that a missing API key raises ValueError."""
    monkeypatch.setattr(Configuration, "load_env", staticmethod(lambda: None))
    monkeypatch.delenv("TAVILY_API_KEY", raising=False)

    with pytest.raises(ValueError, match="TAVILY_API_KEY"):
        Configuration().tavily_api_key
