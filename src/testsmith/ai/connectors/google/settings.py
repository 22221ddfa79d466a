from __future__ import annotations

from pydantic_settings import SettingsConfigDict

from ..base import ConnectorSettings


class GoogleSettings(ConnectorSettings):
    """Reads GOOGLE_API_KEY."""

    model_config = SettingsConfigDict(env_prefix="GOOGLE_", env_file=".env", extra="ignore")
