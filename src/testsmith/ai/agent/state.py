from __future__ import annotations

from enum import StrEnum
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from testsmith.ai.prompts import GenerationRequest
from testsmith.core.frameworks import Framework, FrameworkSpec, get_framework_spec


class RepairStatus(StrEnum):
    IDLE = "idle"
    GENERATING = "generating"
    EXECUTING = "executing"
    SUCCEEDED = "succeeded"
    EXHAUSTED_ATTEMPTS = "exhausted_attempts"


class FailureKind(StrEnum):
    GENERATION = "generation"
    EXECUTION = "execution"


class AttemptRecord(BaseModel):
    number: int
    prompt: str
    script: str | None = None
    success: bool = False
    output: str = ""
    failure_kind: FailureKind | None = None


class RepairState(BaseModel):
    # Inputs
    framework: Framework
    scenario: str
    output_path: Path
    max_attempts: int

    # Loop bookkeeping
    attempt: int = 0  # Number of finished attempts
    status: RepairStatus = RepairStatus.IDLE
    last_error: str | None = None
    last_output: str | None = None

    # Artifacts of the attempt in flight
    prompt: str | None = None
    script: str | None = None

    history: list[AttemptRecord] = []

    @property
    def spec(self) -> FrameworkSpec:
        return get_framework_spec(self.framework)

    @property
    def request(self) -> GenerationRequest:
        return GenerationRequest(framework=self.framework, scenario=self.scenario, previous_error=self.last_error)

    @property
    def succeeded(self) -> bool:
        return self.status == RepairStatus.SUCCEEDED

    @property
    def is_finished(self) -> bool:
        return self.status in {RepairStatus.SUCCEEDED, RepairStatus.EXHAUSTED_ATTEMPTS}

    def after_success(self, record: AttemptRecord) -> dict[str, Any]:
        return {
            "attempt": self.attempt + 1,
            "status": RepairStatus.SUCCEEDED,
            "last_output": record.output,
            "history": [*self.history, record],
        }

    def after_failure(self, record: AttemptRecord) -> dict[str, Any]:
        """State update for a failed attempt: retry while attempts remain, give up otherwise."""
        attempt = self.attempt + 1
        return {
            "attempt": attempt,
            "status": RepairStatus.GENERATING if attempt < self.max_attempts else RepairStatus.EXHAUSTED_ATTEMPTS,
            "last_error": record.output,
            "last_output": record.output,
            "history": [*self.history, record],
        }
