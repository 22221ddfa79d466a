"""Google Gemini connector using the google-genai SDK."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

from google import genai
from google.genai import types

from testsmith.utils.errors import GenerationError

from ..base import AIConnector, ChatMessage, CodePart, GenerationResult, ResponsePart, TextPart
from .settings import GoogleSettings

if TYPE_CHECKING:
    from collections.abc import Sequence

# Gemini only knows the "user" and "model" roles
_ROLES = {"user": "user", "system": "user", "assistant": "model"}


def parts_from_response(response: Any) -> list[ResponsePart]:
    """Convert the first candidate of a Gemini response into text and code parts.

    Parts of any other shape (code execution results, inline data, ...) are skipped.
    """
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        raise GenerationError("Model returned no candidates")

    content = candidates[0].content
    parts: list[ResponsePart] = []
    for part in (content.parts if content else None) or []:
        if part.text:
            parts.append(TextPart(content=part.text))
        elif part.executable_code is not None and part.executable_code.code:
            parts.append(CodePart(code=part.executable_code.code))
    return parts


class GoogleConnector(AIConnector[genai.Client, GoogleSettings]):
    """Connector for Gemini models. Supports the code execution tool."""

    DEFAULT_MODEL: ClassVar[str] = "gemini-2.0-flash"
    API_KEY_ENV_VAR: ClassVar[str] = "GOOGLE_API_KEY"

    def _create_settings(self) -> GoogleSettings:
        return GoogleSettings()

    def _create_client(self) -> genai.Client:
        return genai.Client(api_key=self._settings.api_key, **self.config)

    @staticmethod
    def _build_contents(messages: Sequence[ChatMessage]) -> list[types.Content]:
        return [
            types.Content(role=_ROLES.get(msg.role, "user"), parts=[types.Part(text=msg.content)])
            for msg in messages
        ]

    async def generate(
        self,
        messages: list[ChatMessage],
        temperature: float | None = None,
        code_execution: bool = False,
    ) -> GenerationResult:
        config = types.GenerateContentConfig(
            temperature=temperature,
            tools=[types.Tool(code_execution=types.ToolCodeExecution())] if code_execution else None,
        )
        response = await self.client.aio.models.generate_content(
            model=self.model_name,
            contents=self._build_contents(messages),
            config=config,
        )

        usage = getattr(response, "usage_metadata", None)
        return GenerationResult(
            parts=parts_from_response(response),
            model=self.model_name,
            tokens_used=getattr(usage, "total_token_count", None),
        )
