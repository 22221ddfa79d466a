"""One-time workspace bootstrap: npm packages and TypeScript / mocha configuration files."""

from __future__ import annotations

import json
import shutil
import subprocess
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from rich.console import Console

from testsmith.core.frameworks import get_framework_spec

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from testsmith.core.frameworks import Framework

console = Console()

TSCONFIG = {
    "compilerOptions": {
        "target": "ES2020",
        "module": "commonjs",
        "lib": ["es2020", "DOM"],
        "strict": True,
        "esModuleInterop": True,
        "skipLibCheck": True,
        "forceConsistentCasingInFileNames": True,
        "moduleResolution": "node",
        "resolveJsonModule": True,
        "allowJs": True,
        "types": ["node", "mocha", "selenium-webdriver"],
        "outDir": "./dist",
    },
    "include": ["tests/**/*"],
    "exclude": ["node_modules"],
}

MOCHARC = {
    "extension": ["ts"],
    "spec": "tests/**/*.spec.ts",
    "require": "ts-node/register",
    "timeout": 60000,
}


@dataclass
class SetupReport:
    installed: list[Framework] = field(default_factory=list)
    failed: dict[Framework, str] = field(default_factory=dict)
    created_files: list[Path] = field(default_factory=list)


def install_dependencies(frameworks: Iterable[Framework], cwd: Path, report: SetupReport) -> None:
    """Install the npm packages of every framework, continuing past failures."""
    npm = shutil.which("npm")
    for framework in frameworks:
        spec = get_framework_spec(framework)
        if not spec.npm_packages:
            continue
        if npm is None:
            report.failed[framework] = "npm executable not found"
            continue

        console.print(f"📦 Installing {spec.display_name} dependencies...")
        result = subprocess.run(
            [npm, "install", "-D", *spec.npm_packages],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
        if result.returncode == 0:
            report.installed.append(framework)
        else:
            report.failed[framework] = result.stderr.strip() or f"npm exited with code {result.returncode}"
            console.print(f"[red]Failed to install {spec.display_name} dependencies[/red]")


def write_json_if_missing(path: Path, content: dict, report: SetupReport) -> None:
    if path.exists():
        return
    path.write_text(json.dumps(content, indent=2), encoding="utf-8")
    report.created_files.append(path)
    console.print(f"Created [bold]{path.name}[/bold]")


def setup_workspace(
    project_root: Path,
    test_directory: Path,
    frameworks: Iterable[Framework],
    install: bool = True,
) -> SetupReport:
    report = SetupReport()

    test_directory.mkdir(parents=True, exist_ok=True)
    if install:
        install_dependencies(frameworks, project_root, report)

    # Both files live next to the tests directory, as the test runners expect
    write_json_if_missing(test_directory.parent / "tsconfig.json", TSCONFIG, report)
    write_json_if_missing(test_directory.parent / ".mocharc.json", MOCHARC, report)
    return report
