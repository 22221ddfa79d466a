"""Supported test frameworks and everything testsmith needs to know about each of them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path


class Framework(StrEnum):
    PLAYWRIGHT = "playwright"
    TESTCAFE = "testcafe"
    SELENIUM = "selenium"

    @classmethod
    def parse(cls, value: str) -> Framework:
        """Parse a framework name case-insensitively (``PLAYWRIGHT``, ``playwright``, ...)."""
        try:
            return cls(value.strip().lower())
        except ValueError:
            available = ", ".join(f.value for f in cls)
            raise ValueError(f"Unknown framework '{value}'. Available: {available}") from None


_COMMON_INSTRUCTIONS = (
    "Include meaningful inline comments to explain each step. "
    "The output should be code-only, with no explanation or description outside the code block. "
    "Also console log each test step."
)


@dataclass(frozen=True)
class FrameworkSpec:
    """Static description of a framework: how to prompt for it, where to write it and how to run it."""

    framework: Framework
    display_name: str
    output_suffix: str
    run_command: str
    prompt_intro: str
    prompt_instructions: str
    working_directory: str = "."
    npm_packages: tuple[str, ...] = ()

    def output_filename(self, base_name: str) -> str:
        return f"{base_name}{self.output_suffix}"

    def command_for(self, script_path: Path) -> str:
        """Shell command running the script, which is always referenced by its basename."""
        return self.run_command.format(file=script_path.name)


FRAMEWORKS: dict[Framework, FrameworkSpec] = {
    Framework.PLAYWRIGHT: FrameworkSpec(
        framework=Framework.PLAYWRIGHT,
        display_name="Playwright",
        output_suffix=".playwright.spec.ts",
        run_command="npx playwright test {file}",
        prompt_intro="Generate an accurate and fully executable Playwright test script in TypeScript.",
        prompt_instructions=_COMMON_INSTRUCTIONS,
        npm_packages=("@playwright/test", "playwright"),
    ),
    Framework.TESTCAFE: FrameworkSpec(
        framework=Framework.TESTCAFE,
        display_name="TestCafe",
        output_suffix=".testcafe.ts",
        run_command="npx testcafe chrome {file}",
        prompt_intro="Generate an accurate and fully executable in CLI TestCafe test script in TypeScript.",
        prompt_instructions=_COMMON_INSTRUCTIONS
        + "\n\n"
        + (
            "Also handle invisible elements and wait for them to be visible before interacting with them. "
            "Handle unwanted popups and alerts gracefully."
        ),
        npm_packages=("testcafe",),
    ),
    Framework.SELENIUM: FrameworkSpec(
        framework=Framework.SELENIUM,
        display_name="Selenium",
        output_suffix=".selenium.spec.cjs",
        run_command="npx mocha {file}",
        prompt_intro="Generate an accurate and fully executable Selenium WebDriver test script in JavaScript.",
        prompt_instructions=(
            "Use Selenium WebDriver with JavaScript (CommonJS). Use require() instead of import. "
            "The test should use mocha describe and it functions.\n\n"
        )
        + _COMMON_INSTRUCTIONS
        + "\nHandle popups and alerts gracefully. Wait for elements to be visible before interacting with them.",
        npm_packages=(
            "selenium-webdriver",
            "@types/selenium-webdriver",
            "mocha",
            "@types/mocha",
            "chai",
            "@types/chai",
            "ts-mocha",
            "typescript",
        ),
    ),
}


def get_framework_spec(framework: Framework | str) -> FrameworkSpec:
    if not isinstance(framework, Framework):
        framework = Framework.parse(framework)
    return FRAMEWORKS[framework]
