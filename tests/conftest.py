"""Shared fixtures: a scripted connector and runner so the loop runs without network or npx."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from rich.console import Console

from testsmith.ai.connectors.base import (
    AIConnector,
    ChatMessage,
    CodePart,
    ConnectorSettings,
    GenerationResult,
    TextPart,
)
from testsmith.core.config.main import GenerationConfig, ProjectConfig, TestsmithConfig
from testsmith.core.test import ExecutionResult

if TYPE_CHECKING:
    from testsmith.ai.connectors.base import ResponsePart
    from testsmith.core.frameworks import FrameworkSpec


class FakeConnector(AIConnector[None, ConnectorSettings]):
    """Returns queued responses in order. An exception in the queue is raised instead."""

    DEFAULT_MODEL = "fake-model"
    API_KEY_ENV_VAR = "FAKE_API_KEY"

    def __init__(self, responses: list[list[ResponsePart] | Exception] | None = None) -> None:
        super().__init__(settings=ConnectorSettings(api_key="test-key"))
        self.responses = list(responses or [])
        self.calls: list[dict] = []

    def _create_settings(self) -> ConnectorSettings:
        return ConnectorSettings()

    def _create_client(self) -> None:
        return None

    async def generate(
        self,
        messages: list[ChatMessage],
        temperature: float | None = None,
        code_execution: bool = False,
    ) -> GenerationResult:
        self.calls.append({"messages": messages, "temperature": temperature, "code_execution": code_execution})
        if self.responses:
            response = self.responses.pop(0)
        else:
            response = [CodePart(code=f"console.log('attempt {len(self.calls)}');")]
        if isinstance(response, Exception):
            raise response
        return GenerationResult(parts=response, model=self.model_name)

    @property
    def prompts(self) -> list[str]:
        return [call["messages"][0].content for call in self.calls]


class FakeRunner:
    """Records every run and replays queued results. Succeeds once the queue is empty."""

    def __init__(self, results: list[ExecutionResult] | None = None) -> None:
        self.results = list(results or [])
        self.calls: list[tuple[FrameworkSpec, Path, str]] = []

    async def __call__(self, spec: FrameworkSpec, script_path: Path, timeout: float | None = None) -> ExecutionResult:
        # Keep what was on disk at execution time
        self.calls.append((spec, script_path, script_path.read_text(encoding="utf-8")))
        if self.results:
            return self.results.pop(0)
        return ExecutionResult(success=True, output="1 passed")

    @property
    def frameworks(self) -> list:
        return [spec.framework for spec, _, _ in self.calls]


def code(text: str) -> list[ResponsePart]:
    return [CodePart(code=text)]


def text(content: str) -> list[ResponsePart]:
    return [TextPart(content=content)]


def failure(output: str) -> ExecutionResult:
    return ExecutionResult(success=False, output=output, return_code=1)


@pytest.fixture
def config(tmp_path: Path) -> TestsmithConfig:
    return TestsmithConfig(
        project=ProjectConfig(name="test-project", root=str(tmp_path), test_directory=str(tmp_path / "tests")),
        generation=GenerationConfig(max_attempts=3, base_name="scenario"),
        verbose=False,
    )


@pytest.fixture
def console() -> Console:
    return Console(record=True, width=200)
