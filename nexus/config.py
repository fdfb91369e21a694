"""Configuration management for the Nexus orchestrator."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class OpenAIConfig:
    """Language-model backend configuration.

    When ``endpoint`` is set the client targets Azure OpenAI, otherwise the
    public OpenAI API.
    """

    api_key: str
    endpoint: Optional[str] = None
    api_version: str = "2024-02-15-preview"
    deployment_name: str = "gpt-4o"
    max_concurrent: int = 50

    @property
    def is_azure(self) -> bool:
        return bool(self.endpoint)


@dataclass(frozen=True)
class Config:
    """Application configuration loaded from environment variables."""

    openai: Optional[OpenAIConfig] = None
    model_name: str = "gpt-4o"
    temperature: float = 0.7
    request_timeout: float = 60.0
    include_history: bool = True
    max_sessions: int = 1000
    log_level: str = "INFO"
    environment: str = "development"

    @classmethod
    def from_env(cls) -> Config:
        """Load configuration from environment variables."""
        azure_key = os.getenv("AZURE_OPENAI_KEY")
        azure_endpoint = os.getenv("AZURE_OPENAI_ENDPOINT")
        openai_key = os.getenv("OPENAI_API_KEY")

        openai_config = None
        if azure_key and azure_endpoint:
            openai_config = OpenAIConfig(
                api_key=azure_key,
                endpoint=azure_endpoint,
                api_version=os.getenv("AZURE_OPENAI_API_VERSION", "2024-02-15-preview"),
                deployment_name=os.getenv("AZURE_OPENAI_DEPLOYMENT", "gpt-4o"),
                max_concurrent=int(os.getenv("AZURE_OPENAI_MAX_CONCURRENT", "50")),
            )
        elif openai_key:
            openai_config = OpenAIConfig(
                api_key=openai_key,
                deployment_name=os.getenv("OPENAI_MODEL", "gpt-4o"),
            )

        return cls(
            openai=openai_config,
            model_name=openai_config.deployment_name if openai_config else "gpt-4o",
            temperature=float(os.getenv("NEXUS_TEMPERATURE", "0.7")),
            request_timeout=float(os.getenv("NEXUS_REQUEST_TIMEOUT", "60")),
            include_history=_env_flag("NEXUS_INCLUDE_HISTORY", True),
            max_sessions=int(os.getenv("NEXUS_MAX_SESSIONS", "1000")),
            log_level=os.getenv("NEXUS_LOG_LEVEL", "INFO").upper(),
            environment=os.getenv("ENVIRONMENT", "development"),
        )


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def configure_logging(level: Optional[str] = None) -> None:
    """Install the root handler used by the API server and the terminal demo."""
    logging.basicConfig(
        level=level or config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# Global config instance
config = Config.from_env()
