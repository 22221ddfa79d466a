from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from jinja2 import Template

if TYPE_CHECKING:
    from pathlib import Path

    from testsmith.core.frameworks import Framework, FrameworkSpec

PROMPT_TEMPLATE = Template(
    """\
{{ intro }}
Project Structure Context:
{{ context }}

Current working directory: {{ working_directory }}
Target output file: {{ output_file }}

{{ instructions }}
{%- if previous_error %}

The previous attempt failed with the following error:
{{ previous_error }}
Please correct the code and regenerate.
{%- endif %}"""
)


@dataclass(frozen=True)
class GenerationRequest:
    """Everything that varies between two attempts for the same framework."""

    framework: Framework
    scenario: str
    previous_error: str | None = None


def build_prompt(
    request: GenerationRequest,
    spec: FrameworkSpec,
    context: str,
    test_directory: Path,
    output_file: str,
) -> str:
    """Compose the generation prompt for one attempt.

    The previous error, when present, is embedded verbatim so the model sees exactly what failed.
    """
    return PROMPT_TEMPLATE.render(
        intro=spec.prompt_intro,
        context=context,
        working_directory=test_directory,
        output_file=output_file,
        instructions=spec.prompt_instructions,
        previous_error=request.previous_error,
    )
