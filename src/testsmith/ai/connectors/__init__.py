"""AI connector package for different LLM providers."""

from .anthropic import AnthropicConnector
from .base import AIConnector, ChatMessage, CodePart, GenerationResult, ResponsePart, TextPart
from .factory import connect, get_available_providers
from .google import GoogleConnector
from .openai import OpenAIConnector

__all__ = [
    "AIConnector",
    "AnthropicConnector",
    "ChatMessage",
    "CodePart",
    "GenerationResult",
    "GoogleConnector",
    "OpenAIConnector",
    "ResponsePart",
    "TextPart",
    "connect",
    "get_available_providers",
]
