# /*
# Copyright 2026 The Lissto Authors.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# */

"""Run subcommand: execute scenario groups through pytest."""

from __future__ import annotations

from pathlib import Path

import pytest
import typer
from rich.panel import Panel

from lissto_e2e import console
from lissto_e2e.constants import E2E_TESTS_DIR, SCENARIO_GROUPS


def build_pytest_args(
    groups: list[str],
    tests_dir: Path,
    keyword: str | None = None,
    junit_xml: Path | None = None,
) -> list[str]:
    """Translate group names and options into a pytest argument vector.

    Args:
        groups: Scenario group names; empty means every group.
        tests_dir: Directory holding the scenario modules.
        keyword: Optional ``-k`` expression.
        junit_xml: Optional JUnit XML report path.

    Returns:
        Arguments for :func:`pytest.main`.

    Raises:
        typer.BadParameter: If a group name is unknown or *tests_dir* does
            not exist.
    """
    if not tests_dir.is_dir():
        raise typer.BadParameter(
            f"scenario directory {tests_dir} not found; run from a source checkout "
            "(pip install -e .) or pass --tests-dir"
        )
    unknown = [g for g in groups if g not in SCENARIO_GROUPS]
    if unknown:
        raise typer.BadParameter(
            f"unknown group(s) {', '.join(unknown)}; choose from {', '.join(SCENARIO_GROUPS)}"
        )
    # Scenario modules keep their numbered order whatever order groups are given in.
    selected = [name for name in SCENARIO_GROUPS if name in groups]
    targets = [str(tests_dir / SCENARIO_GROUPS[g]) for g in selected] or [str(tests_dir)]
    args = ["--e2e", "-v", *targets]
    if keyword:
        args += ["-k", keyword]
    if junit_xml is not None:
        args.append(f"--junitxml={junit_xml}")
    return args


def run(
    group: list[str] | None = typer.Option(
        None, "--group", "-g", help=f"Scenario group to run ({', '.join(SCENARIO_GROUPS)}); repeatable"),
    keyword: str | None = typer.Option(
        None, "--keyword", "-k", help="Only run tests matching this pytest -k expression"),
    junit_xml: Path | None = typer.Option(
        None, "--junit-xml", help="Write a JUnit XML report to this path"),
    tests_dir: Path = typer.Option(
        E2E_TESTS_DIR, "--tests-dir", help="Directory holding the scenario modules"),
) -> None:
    """Run the scenario suite against the current cluster."""
    args = build_pytest_args(group or [], tests_dir, keyword, junit_xml)
    console.print(Panel.fit("Running Lissto E2E scenarios", style="bold blue"))
    console.print(f"[yellow]pytest {' '.join(args)}[/yellow]")
    exit_code = int(pytest.main(args))
    if exit_code == 0:
        console.print("[green]✅ All scenarios passed[/green]")
    else:
        console.print(f"[red]❌ pytest exited with status {exit_code}[/red]")
    raise typer.Exit(code=exit_code)
