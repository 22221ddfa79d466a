"""Factory for creating AI connectors."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from testsmith.utils.errors import InitError

from .anthropic.connector import AnthropicConnector
from .google.connector import GoogleConnector
from .openai.connector import OpenAIConnector

if TYPE_CHECKING:
    from .base import AIConnector

# Registry of available connectors
CONNECTOR_REGISTRY: dict[str, type[AIConnector]] = {
    "google": GoogleConnector,
    "gemini": GoogleConnector,  # Alias
    "anthropic": AnthropicConnector,
    "claude": AnthropicConnector,  # Alias
    "openai": OpenAIConnector,
    "gpt": OpenAIConnector,  # Alias
}


def connect(provider: str, model_name: str | None = None, **kwargs: Any) -> AIConnector:
    """Create a connector for the specified provider.

    Args:
        provider: The AI provider (google, anthropic, openai, or one of their aliases)
        model_name: Optional specific model name, the connector default is used otherwise
        **kwargs: Additional configuration for the connector

    Raises:
        InitError: If provider is not supported
    """
    provider_lower = provider.lower()

    if provider_lower not in CONNECTOR_REGISTRY:
        available = ", ".join(CONNECTOR_REGISTRY.keys())
        raise InitError(f"Unsupported provider '{provider}'. Available: {available}")

    return CONNECTOR_REGISTRY[provider_lower](model_name=model_name, **kwargs)


def get_available_providers() -> list[str]:
    """Get list of available providers."""
    return list(CONNECTOR_REGISTRY.keys())
