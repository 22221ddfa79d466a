from __future__ import annotations

from pydantic_settings import SettingsConfigDict

from ..base import ConnectorSettings


class OpenAISettings(ConnectorSettings):
    """Reads OPENAI_API_KEY."""

    model_config = SettingsConfigDict(env_prefix="OPENAI_", env_file=".env", extra="ignore")
