"""Tests for the generate, run and repair loop of a single framework."""

from pathlib import Path

import pytest
from conftest import FakeConnector, FakeRunner, code, failure

from testsmith.ai.agent import FailureKind, RepairLoopAgent, RepairStatus
from testsmith.ai.synthesizer import PROVENANCE_HEADER, ScriptSynthesizer, failed_script
from testsmith.core.frameworks import Framework
from testsmith.core.test import ExecutionResult

CONTEXT = "📁 /project/tests"


def make_agent(config, connector, runner, console, framework=Framework.PLAYWRIGHT) -> RepairLoopAgent:
    config.project.test_path.mkdir(parents=True, exist_ok=True)
    return RepairLoopAgent(
        config,
        framework,
        synthesizer=ScriptSynthesizer(connector),
        context=CONTEXT,
        scenario="Open example.com",
        runner=runner,
        console=console,
    )


class TestRepairLoop:
    async def test_first_attempt_success(self, config, console) -> None:
        connector = FakeConnector([code("test('ok');")])
        runner = FakeRunner()

        state = await make_agent(config, connector, runner, console).run()

        assert state.status == RepairStatus.SUCCEEDED
        assert state.attempt == 1
        assert len(connector.calls) == 1
        assert len(runner.calls) == 1
        assert state.last_output == "1 passed"
        assert "previous attempt failed" not in connector.prompts[0]

    async def test_timeout_error_is_fed_back_and_second_attempt_passes(self, config, console) -> None:
        connector = FakeConnector([code("// attempt 1"), code("// attempt 2")])
        runner = FakeRunner([failure("Timeout 30000ms exceeded"), ExecutionResult(success=True, output="1 passed")])

        state = await make_agent(config, connector, runner, console).run()

        assert state.succeeded
        assert state.attempt == 2
        assert len(connector.calls) == 2  # No third generation request
        assert len(runner.calls) == 2
        assert "Timeout 30000ms exceeded" in connector.prompts[1]
        assert "Timeout 30000ms exceeded" not in connector.prompts[0]

    async def test_error_feedback_is_verbatim(self, config, console) -> None:
        error = "  Error: expect(received).toBe(expected)\n\n    at /tests/x.spec.ts:12:5\n\t[chromium] ✘ 1 failed\n"
        connector = FakeConnector()
        runner = FakeRunner([failure(error)])

        await make_agent(config, connector, runner, console).run()

        assert (
            "The previous attempt failed with the following error:\n"
            f"{error}\n"
            "Please correct the code and regenerate."
        ) in connector.prompts[1]

    async def test_each_retry_uses_the_latest_error(self, config, console) -> None:
        connector = FakeConnector()
        runner = FakeRunner([failure("first error"), failure("second error")])

        await make_agent(config, connector, runner, console).run()

        assert "first error" in connector.prompts[1]
        assert "second error" in connector.prompts[2]
        assert "first error" not in connector.prompts[2]

    async def test_stops_after_max_attempts(self, config, console) -> None:
        connector = FakeConnector()
        runner = FakeRunner([failure("boom 1"), failure("boom 2"), failure("boom 3"), failure("never used")])

        state = await make_agent(config, connector, runner, console).run()

        assert state.status == RepairStatus.EXHAUSTED_ATTEMPTS
        assert state.attempt == 3
        assert len(connector.calls) == 3
        assert len(runner.calls) == 3
        assert state.last_error == "boom 3"
        assert "All 3 attempts failed" in console.export_text()

    @pytest.mark.parametrize("max_attempts", [1, 2, 5])
    async def test_attempt_bound_follows_config(self, config, console, max_attempts: int) -> None:
        config.generation.max_attempts = max_attempts
        runner = FakeRunner([failure(f"error {i}") for i in range(10)])

        state = await make_agent(config, FakeConnector(), runner, console).run()

        assert len(runner.calls) == max_attempts
        assert len(state.history) == max_attempts

    @pytest.mark.parametrize("succeeding_attempt", [1, 2, 3])
    async def test_success_stops_further_attempts(self, config, console, succeeding_attempt: int) -> None:
        failures = [failure(f"error {i}") for i in range(1, succeeding_attempt)]
        connector = FakeConnector()
        runner = FakeRunner(failures)

        state = await make_agent(config, connector, runner, console).run()

        assert state.succeeded
        assert len(connector.calls) == succeeding_attempt
        assert len(runner.calls) == succeeding_attempt

    async def test_output_file_holds_last_attempt(self, config, console) -> None:
        connector = FakeConnector([code("// attempt 1"), code("// attempt 2"), code("// attempt 3")])
        runner = FakeRunner([failure("syntax error"), failure("different error"), failure("third error")])

        state = await make_agent(config, connector, runner, console).run()

        assert state.output_path == config.project.test_path / "scenario.playwright.spec.ts"
        assert state.output_path.read_text() == PROVENANCE_HEADER + "// attempt 3\n"
        assert [Path(path) for _, path, _ in runner.calls] == [state.output_path] * 3
        # Every run saw the script generated by its own attempt
        assert [content for _, _, content in runner.calls] == [
            PROVENANCE_HEADER + "// attempt 1\n",
            PROVENANCE_HEADER + "// attempt 2\n",
            PROVENANCE_HEADER + "// attempt 3\n",
        ]

    async def test_generation_failure_is_retried(self, config, console) -> None:
        connector = FakeConnector([RuntimeError("429 RESOURCE_EXHAUSTED"), code("// fixed")])
        runner = FakeRunner()

        state = await make_agent(config, connector, runner, console).run()

        assert state.succeeded
        assert state.attempt == 2
        assert len(runner.calls) == 1  # Nothing to run for the failed generation
        assert state.history[0].failure_kind == FailureKind.GENERATION
        assert state.history[0].output == "Script generation failed: RuntimeError: 429 RESOURCE_EXHAUSTED"
        assert state.history[0].output in connector.prompts[1]

    async def test_empty_response_is_a_generation_failure(self, config, console) -> None:
        connector = FakeConnector([[], code("// real code")])
        runner = FakeRunner()

        state = await make_agent(config, connector, runner, console).run()

        assert state.history[0].failure_kind == FailureKind.GENERATION
        assert "EmptyScriptError" in state.history[0].output
        assert len(runner.calls) == 1

    async def test_all_generations_failing_exhausts_attempts(self, config, console) -> None:
        connector = FakeConnector([ValueError("bad response")] * 3)
        runner = FakeRunner()

        state = await make_agent(config, connector, runner, console).run()

        assert state.status == RepairStatus.EXHAUSTED_ATTEMPTS
        assert runner.calls == []
        assert state.last_error == "Script generation failed: ValueError: bad response"

    async def test_final_generation_failure_replaces_earlier_script(self, config, console) -> None:
        connector = FakeConnector([code("// attempt 1"), code("// attempt 2"), RuntimeError("quota exceeded")])
        runner = FakeRunner([failure("first error"), failure("second error")])

        state = await make_agent(config, connector, runner, console).run()

        assert state.status == RepairStatus.EXHAUSTED_ATTEMPTS
        content = state.output_path.read_text()
        assert "attempt 2" not in content
        assert content == failed_script("Script generation failed: RuntimeError: quota exceeded")

    async def test_output_file_exists_when_every_generation_fails(self, config, console) -> None:
        connector = FakeConnector([ValueError("bad response")] * 3)

        state = await make_agent(config, connector, FakeRunner(), console).run()

        assert state.output_path.read_text().startswith(PROVENANCE_HEADER)
        assert "// Script generation failed: ValueError: bad response" in state.output_path.read_text()

    async def test_runner_exception_is_an_execution_failure(self, config, console) -> None:
        calls = 0

        async def exploding_runner(spec, path, timeout=None):
            nonlocal calls
            calls += 1
            if calls == 1:
                raise OSError("spawn npx ENOENT")
            return ExecutionResult(success=True, output="ok")

        state = await make_agent(config, FakeConnector(), exploding_runner, console).run()

        assert state.succeeded
        assert state.history[0].failure_kind == FailureKind.EXECUTION
        assert state.history[0].output == "OSError: spawn npx ENOENT"

    async def test_history_records_each_attempt(self, config, console) -> None:
        connector = FakeConnector([code("// one"), code("// two")])
        runner = FakeRunner([failure("nope")])

        state = await make_agent(config, connector, runner, console).run()

        assert [record.number for record in state.history] == [1, 2]
        assert [record.success for record in state.history] == [False, True]
        assert state.history[0].failure_kind == FailureKind.EXECUTION
        assert state.history[0].script == PROVENANCE_HEADER + "// one\n"
        assert state.history[1].prompt == connector.prompts[1]

    async def test_prompt_targets_framework_output_file(self, config, console) -> None:
        connector = FakeConnector()

        await make_agent(config, connector, FakeRunner(), console, framework=Framework.SELENIUM).run()

        prompt = connector.prompts[0]
        assert "Target output file: scenario.selenium.spec.cjs" in prompt
        assert f"Current working directory: {config.project.test_path}" in prompt
        assert CONTEXT in prompt
        assert connector.calls[0]["messages"][1].content == "Open example.com"

    async def test_scenario_defaults_to_config(self, config, console) -> None:
        config.generation.scenario = "Configured scenario"
        connector = FakeConnector()
        config.project.test_path.mkdir(parents=True)

        agent = RepairLoopAgent(
            config, Framework.TESTCAFE, ScriptSynthesizer(connector), CONTEXT, runner=FakeRunner(), console=console
        )
        await agent.run()

        assert connector.calls[0]["messages"][1].content == "Configured scenario"
