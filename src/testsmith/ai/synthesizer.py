"""Turns a prompt into a script body using a generative model."""

from __future__ import annotations

from typing import TYPE_CHECKING

from testsmith.utils.errors import EmptyScriptError

from .connectors.base import ChatMessage, CodePart, TextPart

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .connectors.base import AIConnector, ResponsePart

PROVENANCE_HEADER = "// *** This code is generated by AI Agent ***\n\n"
CODE_FENCE = "```"


def strip_fence_lines(text: str) -> str:
    """Drop every line that contains a markdown code fence delimiter."""
    return "\n".join(line for line in text.split("\n") if CODE_FENCE not in line)


def failed_script(error: str) -> str:
    """Script body written when generation fails, so the output file always reflects the latest attempt."""
    commented = "\n".join(f"// {line}".rstrip() for line in error.splitlines())
    return f"{PROVENANCE_HEADER}// Script generation failed, nothing to run.\n{commented}\n"


def assemble_script(parts: Iterable[ResponsePart]) -> str:
    """Concatenate response parts, in order, into a script body prefixed with the provenance header."""
    output = ""
    for part in parts:
        match part:
            case TextPart(content=content):
                output += f"{strip_fence_lines(content)}\n"
            case CodePart(code=code):
                output += f"{code}\n"

    if not output.strip():
        raise EmptyScriptError("Model response contained no code")

    return PROVENANCE_HEADER + output


class ScriptSynthesizer:
    """Sends exactly one generation request per script.

    Connector errors are not handled here, the caller decides what a failed attempt means.
    """

    def __init__(self, connector: AIConnector, temperature: float | None = None) -> None:
        self.connector = connector
        self.temperature = temperature

    async def synthesize(self, prompt: str, scenario: str) -> str:
        result = await self.connector.generate(
            [
                ChatMessage(role="user", content=prompt),
                ChatMessage(role="user", content=scenario),
            ],
            temperature=self.temperature,
            code_execution=True,
        )
        return assemble_script(result.parts)
