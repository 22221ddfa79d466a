from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console

from testsmith.core.test import run_script

from .graph import RepairLoopAgent

if TYPE_CHECKING:
    from collections.abc import Sequence

    from testsmith.ai.synthesizer import ScriptSynthesizer
    from testsmith.core.config.main import TestsmithConfig
    from testsmith.core.frameworks import Framework

    from .state import RepairState
    from .tools.run_test import ScriptRunner


class MultiFrameworkDriver:
    """Runs the repair loop for every framework, one after another.

    A framework that exhausts its attempts does not stop the frameworks after it.
    """

    def __init__(
        self,
        config: TestsmithConfig,
        synthesizer: ScriptSynthesizer,
        context: str,
        frameworks: Sequence[Framework] | None = None,
        scenario: str | None = None,
        runner: ScriptRunner = run_script,
        console: Console | None = None,
    ) -> None:
        self.config = config
        self.synthesizer = synthesizer
        self.context = context
        self.frameworks = list(frameworks) if frameworks is not None else list(config.generation.frameworks)
        self.scenario = scenario
        self.runner = runner
        self._console = console or Console()

    async def run(self) -> dict[Framework, RepairState]:
        self.config.project.test_path.mkdir(parents=True, exist_ok=True)

        outcomes: dict[Framework, RepairState] = {}
        for framework in self.frameworks:
            agent = RepairLoopAgent(
                self.config,
                framework,
                synthesizer=self.synthesizer,
                context=self.context,
                scenario=self.scenario,
                runner=self.runner,
                console=self._console,
            )
            outcomes[framework] = await agent.run()
        return outcomes
