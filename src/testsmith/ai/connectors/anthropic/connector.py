"""Anthropic Claude connector using langchain."""

from __future__ import annotations

from typing import ClassVar

from langchain_anthropic import ChatAnthropic

from ..base import AIConnector, ChatMessage, GenerationResult
from ..chat_models import parts_from_content, to_langchain_messages
from .settings import AnthropicSettings


class AnthropicConnector(AIConnector[ChatAnthropic, AnthropicSettings]):
    """Connector for Anthropic Claude models via langchain. Code execution is not requested."""

    DEFAULT_MODEL: ClassVar[str] = "claude-3-5-sonnet-20241022"
    API_KEY_ENV_VAR: ClassVar[str] = "ANTHROPIC_API_KEY"

    def _create_settings(self) -> AnthropicSettings:
        return AnthropicSettings()

    def _create_client(self) -> ChatAnthropic:
        return ChatAnthropic(
            model_name=self.model_name,
            api_key=self._settings.api_key,
            **self.config,
        )

    async def generate(
        self,
        messages: list[ChatMessage],
        temperature: float | None = None,
        code_execution: bool = False,
    ) -> GenerationResult:
        # Bound per call, the cached client keeps its configured temperature
        model = self.client if temperature is None else self.client.bind(temperature=temperature)

        response = await model.ainvoke(to_langchain_messages(messages))

        usage = getattr(response, "usage_metadata", None) or {}
        return GenerationResult(
            parts=parts_from_content(response.content),
            model=self.model_name,
            tokens_used=usage.get("total_tokens"),
        )
