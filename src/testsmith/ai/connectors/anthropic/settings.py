from __future__ import annotations

from pydantic_settings import SettingsConfigDict

from ..base import ConnectorSettings


class AnthropicSettings(ConnectorSettings):
    """Reads ANTHROPIC_API_KEY."""

    model_config = SettingsConfigDict(env_prefix="ANTHROPIC_", env_file=".env", extra="ignore")
