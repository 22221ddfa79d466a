from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

from rich.panel import Panel
from rich.syntax import Syntax
from rich.text import Text

from testsmith.ai.agent.state import AttemptRecord, FailureKind, RepairStatus
from testsmith.ai.prompts import build_prompt
from testsmith.ai.synthesizer import failed_script

if TYPE_CHECKING:
    from rich.console import Console

    from testsmith.ai.agent.state import RepairState
    from testsmith.ai.synthesizer import ScriptSynthesizer


async def generate_script(
    state: RepairState,
    synthesizer: ScriptSynthesizer,
    context: str,
    console: Console,
    verbose: bool = True,
) -> dict[str, Any]:
    """Build the prompt for the next attempt, synthesize a script and overwrite the output file."""
    number = state.attempt + 1
    console.print(f"🧠 Executing [{state.spec.display_name}] test:: Attempt #{number}...")

    prompt = build_prompt(
        state.request,
        state.spec,
        context,
        test_directory=state.output_path.parent,
        output_file=state.output_path.name,
    )

    try:
        script = await synthesizer.synthesize(prompt, state.scenario)
        await asyncio.to_thread(state.output_path.write_text, script, encoding="utf-8")
    except Exception as e:  # noqa: BLE001
        # Any failure here ends the attempt, its message becomes the next prompt's error context
        error = f"Script generation failed: {e.__class__.__name__}: {e}"
        try:
            await asyncio.to_thread(state.output_path.write_text, failed_script(error), encoding="utf-8")
        except OSError as write_error:
            error = f"{error}\nCould not write {state.output_path.name}: {write_error}"
        console.print(
            Panel(
                Text(error),
                title=f"❌ [{state.spec.display_name}] Generation failed on attempt {number}",
                title_align="left",
                border_style="red",
            )
        )
        record = AttemptRecord(number=number, prompt=prompt, output=error, failure_kind=FailureKind.GENERATION)
        return state.after_failure(record) | {"prompt": prompt, "script": None}

    if verbose:
        console.print(
            Panel(
                Syntax(script, "typescript", theme="monokai", line_numbers=False, word_wrap=True),
                title=f"🤖 {state.output_path.name} ({len(script)} characters)",
                title_align="left",
                border_style="blue",
            )
        )

    return {"status": RepairStatus.EXECUTING, "prompt": prompt, "script": script}
