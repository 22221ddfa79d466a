"""Base connector interface for AI models."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Annotated, Any, ClassVar, Generic, Literal, TypeVar

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

from testsmith.utils.errors import InitError


class ChatMessage(BaseModel):
    """Represents a chat message."""

    role: str  # "user", "assistant", "system"
    content: str


class TextPart(BaseModel):
    """Plain text returned by the model. May contain markdown around the code."""

    kind: Literal["text"] = "text"
    content: str


class CodePart(BaseModel):
    """Code the model emitted through its code execution tool."""

    kind: Literal["code"] = "code"
    code: str


ResponsePart = Annotated[TextPart | CodePart, Field(discriminator="kind")]


class GenerationResult(BaseModel):
    """Result from AI generation."""

    parts: list[ResponsePart]
    model: str
    tokens_used: int | None = None

    @property
    def text(self) -> str:
        return "".join(part.content for part in self.parts if isinstance(part, TextPart))


class ConnectorSettings(BaseSettings):
    """Credentials of a connector, read from the environment or a .env file."""

    api_key: str | None = None


ClientT = TypeVar("ClientT")
SettingsT = TypeVar("SettingsT", bound=ConnectorSettings)


class AIConnector(ABC, Generic[ClientT, SettingsT]):
    """Abstract base class for AI model connectors."""

    DEFAULT_MODEL: ClassVar[str]
    API_KEY_ENV_VAR: ClassVar[str]

    def __init__(self, model_name: str | None = None, settings: SettingsT | None = None, **kwargs: Any) -> None:
        """Initialize the connector."""
        self.model_name = model_name or self.DEFAULT_MODEL
        self.config = kwargs
        self._settings = settings if settings is not None else self._create_settings()
        self._client: ClientT | None = None

    @abstractmethod
    def _create_settings(self) -> SettingsT: ...

    @abstractmethod
    def _create_client(self) -> ClientT: ...

    @property
    def client(self) -> ClientT:
        """Get or lazily create the underlying client."""
        if self._client is None:
            if not self.is_available:
                raise InitError(f"{self.API_KEY_ENV_VAR} is not set")
            self._client = self._create_client()
        return self._client

    @property
    def is_available(self) -> bool:
        """Check if the connector is available (API key set, etc.)."""
        return bool(self._settings.api_key)

    @abstractmethod
    async def generate(
        self,
        messages: list[ChatMessage],
        temperature: float | None = None,
        code_execution: bool = False,
    ) -> GenerationResult:
        """Generate a response from the AI model.

        ``code_execution`` asks for a response mode in which the model may return
        executable code parts. Connectors without such a mode ignore it.
        """
