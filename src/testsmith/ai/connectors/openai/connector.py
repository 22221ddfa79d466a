"""OpenAI GPT connector using langchain."""

from __future__ import annotations

from typing import ClassVar

from langchain_openai import ChatOpenAI

from ..base import AIConnector, ChatMessage, GenerationResult
from ..chat_models import parts_from_content, to_langchain_messages
from .settings import OpenAISettings


class OpenAIConnector(AIConnector[ChatOpenAI, OpenAISettings]):
    """Connector for OpenAI models via langchain."""

    DEFAULT_MODEL: ClassVar[str] = "gpt-4o"
    API_KEY_ENV_VAR: ClassVar[str] = "OPENAI_API_KEY"

    def _create_settings(self) -> OpenAISettings:
        return OpenAISettings()

    def _create_client(self) -> ChatOpenAI:
        return ChatOpenAI(
            model=self.model_name,
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
