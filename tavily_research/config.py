"""Configuration management for the research client."""

import os
from typing import Any

import yaml
from dotenv import load_dotenv

API_KEY_ENV = "TAVILY_API_KEY"

HTTP_TIMEOUT_KEYS = [
    "connect_timeout", "read_timeout", "write_timeout", "pool_timeout"
]


class Configuration:
    """Manages configuration and environment variables for the research client."""

    def __init__(self, config_path: str | None = None) -> None:
        """Initialize configuration from YAML and environment variables."""
        self.load_env()  # Load .env for API keys
        self.config_path = config_path or os.path.join(
            os.path.dirname(__file__), "config.yaml"
        )
        self._config = self._load_yaml_config()

    @staticmethod
    def load_env() -> None:
        """Load environment variables from .env file."""
        load_dotenv()

    def _load_yaml_config(self) -> dict[str, Any]:
        """Load configuration from YAML file."""
        with open(self.config_path) as file:
            config = yaml.safe_load(file)
            if not isinstance(config, dict):
                raise ValueError(
                    f"Config file must be YAML dict, got {type(config)}"
                )
            return config

    @property
    def tavily_api_key(self) -> str:
        """Get the research API key.

        Returns:
            The API key as a string.

        Raises:
            ValueError: If the API key is not found in environment variables.
        """
        api_key = os.getenv(API_KEY_ENV)
        if not api_key:
            raise ValueError(
                f"API key '{API_KEY_ENV}' not found in environment variables"
            )
        return api_key

    def get_research_config(self) -> dict[str, Any]:
        """Get research endpoint configuration from YAML.

        Returns:
            Research configuration dictionary with validated HTTP timeouts.

        Raises:
            ValueError: If required HTTP client parameters are missing or invalid.
        """
        research_config = self._config.get("research", {})
        http_config = research_config.get("http_client", {})

        for key in HTTP_TIMEOUT_KEYS:
            if key not in http_config:
                raise ValueError(
                    f"research.http_client.{key} must be explicitly configured "
                    "in config.yaml"
                )
            value = http_config[key]
            if not isinstance(value, int | float) or value <= 0:
                raise ValueError(
                    f"research.http_client.{key} must be a positive number"
                )

        return research_config

    def get_logging_config(self) -> dict[str, Any]:
        """Get logging configuration from YAML.

        Returns:
            Logging configuration dictionary.
        """
        return self._config.get("logging", {})
