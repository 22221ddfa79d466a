from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Any

from langgraph.graph import END, StateGraph
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from testsmith.core.frameworks import get_framework_spec
from testsmith.core.test import run_script

from .state import RepairState, RepairStatus
from .tools.generate import generate_script
from .tools.run_test import run_test

if TYPE_CHECKING:
    from testsmith.ai.synthesizer import ScriptSynthesizer
    from testsmith.core.config.main import TestsmithConfig
    from testsmith.core.frameworks import Framework

    from .tools.run_test import ScriptRunner


class RepairNode(StrEnum):
    GENERATE = "generate"
    EXECUTE = "execute"


def route(state: RepairState) -> str:
    if state.status == RepairStatus.GENERATING:
        return RepairNode.GENERATE
    if state.status == RepairStatus.EXECUTING:
        return RepairNode.EXECUTE
    return END


class RepairLoopAgent:
    """Generates, runs and repairs the test script of a single framework.

    Each attempt synthesizes a script, overwrites the framework's output file and runs it.
    A failed attempt feeds its error text into the next prompt until the script passes or
    ``generation.max_attempts`` attempts have been made.
    """

    def __init__(
        self,
        config: TestsmithConfig,
        framework: Framework,
        synthesizer: ScriptSynthesizer,
        context: str,
        scenario: str | None = None,
        runner: ScriptRunner = run_script,
        console: Console | None = None,
    ) -> None:
        self.config = config
        self.spec = get_framework_spec(framework)
        self.synthesizer = synthesizer
        self.context = context
        self.runner = runner
        self._console = console or Console()

        self.state = RepairState(
            framework=self.spec.framework,
            scenario=scenario if scenario is not None else config.generation.scenario,
            output_path=config.project.test_path / self.spec.output_filename(config.generation.base_name),
            max_attempts=config.generation.max_attempts,
        )

        graph = StateGraph(RepairState)

        graph.add_node(RepairNode.GENERATE, self.generate)
        graph.add_node(RepairNode.EXECUTE, self.execute)

        graph.set_entry_point(RepairNode.GENERATE)

        path_map = {RepairNode.GENERATE: RepairNode.GENERATE, RepairNode.EXECUTE: RepairNode.EXECUTE, END: END}
        graph.add_conditional_edges(RepairNode.GENERATE, route, path_map)
        graph.add_conditional_edges(RepairNode.EXECUTE, route, path_map)

        self._app = graph.compile()

    async def generate(self, state: RepairState) -> dict[str, Any]:
        return await generate_script(state, self.synthesizer, self.context, self._console, verbose=self.config.verbose)

    async def execute(self, state: RepairState) -> dict[str, Any]:
        return await run_test(state, self.runner, self._console, timeout=self.config.generation.timeout)

    async def run(self) -> RepairState:
        self._console.print(f"\n🔧 Generating tests for {self.spec.display_name}...")

        initial = self.state.model_copy(update={"status": RepairStatus.GENERATING, "attempt": 0, "last_error": None})
        # Every attempt takes two steps: generate and execute
        result = await self._app.ainvoke(initial, config={"recursion_limit": 2 * initial.max_attempts + 2})
        self.state = result if isinstance(result, RepairState) else RepairState.model_validate(result)

        if self.state.status == RepairStatus.EXHAUSTED_ATTEMPTS:
            self._console.print(
                Panel(
                    Text(self.state.last_error or ""),
                    title=f"💥 [{self.spec.display_name}] All {self.state.max_attempts} attempts failed. Last error",
                    title_align="left",
                    border_style="red",
                )
            )

        return self.state
