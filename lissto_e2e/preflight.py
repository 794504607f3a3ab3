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

"""Environment checks run before the scenario suite."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from rich.panel import Panel
from rich.table import Table

from lissto_e2e import console
from lissto_e2e.cluster import ClusterClient
from lissto_e2e.config import E2ESettings
from lissto_e2e.constants import PLATFORM_DEPLOYMENTS, REQUIRED_FIXTURES, Role
from lissto_e2e.fixtures import compose_services, fixture_exists
from lissto_e2e.polling import TRANSIENT_ERRORS
from lissto_e2e.runner import LisstoCLI

_CHECK_ERRORS = (RuntimeError, ValueError, *TRANSIENT_ERRORS)


@dataclass(frozen=True)
class CheckResult:
    """Outcome of one preflight check.

    Attributes:
        name: Short label of what was checked.
        passed: Whether the check succeeded.
        detail: Failure reason or extra information.
    """

    name: str
    passed: bool
    detail: str = ""


def _check(name: str, probe: Callable[[], str | bool]) -> CheckResult:
    """Run *probe*; a falsy result or a known error fails the check."""
    try:
        outcome = probe()
    except _CHECK_ERRORS as err:
        return CheckResult(name, False, str(err).splitlines()[0] if str(err) else type(err).__name__)
    if outcome is False:
        return CheckResult(name, False)
    return CheckResult(name, True, outcome if isinstance(outcome, str) else "")


def _cluster_checks(settings: E2ESettings, cluster: ClusterClient) -> list[CheckResult]:
    ns = settings.system_namespace
    results = [
        _check(f"namespace {ns}", lambda: cluster.namespace_exists(ns)),
        _check("blueprints kind served", lambda: f"{len(cluster.list_blueprints(ns))} in {ns}"),
        _check("stacks kind served", lambda: f"{len(cluster.list_stacks(ns))} in {ns}"),
    ]
    for name in PLATFORM_DEPLOYMENTS:
        results.append(
            _check(f"deployment {name} ready", lambda name=name: cluster.deployment_ready(ns, name))
        )
    return results


def _switch_context(cli: LisstoCLI, context: str) -> str:
    cli.run("context", "use", context)
    current = cli.current_context()
    if current != context:
        raise RuntimeError(f"current context is {current!r} after switching")
    return current


def _fixture_services(settings: E2ESettings, name: str) -> str:
    if not fixture_exists(settings.fixtures_dir, name):
        raise ValueError(f"missing from {settings.fixtures_dir}")
    return ", ".join(compose_services(settings.fixtures_dir, name))


def _cli_checks(cli: LisstoCLI) -> list[CheckResult]:
    results = []
    for role in Role:
        context = cli.contexts[role]
        results.append(
            _check(f"context {context} switchable", lambda context=context: _switch_context(cli, context))
        )
    return results


def run_preflight(settings: E2ESettings) -> list[CheckResult]:
    """Check that the CLI, the cluster, and the fixtures are usable.

    Args:
        settings: Resolved suite settings.

    Returns:
        One result per check, in execution order.
    """
    results: list[CheckResult] = []

    cli: LisstoCLI | None = None
    try:
        cli = LisstoCLI.from_settings(settings)
        results.append(CheckResult("lissto binary", True, cli.binary_path))
    except RuntimeError as err:
        results.append(CheckResult("lissto binary", False, str(err)))

    results.append(
        CheckResult("cli config directory", settings.cli_config_dir.is_dir(), str(settings.cli_config_dir))
    )

    cluster: ClusterClient | None = None
    try:
        cluster = ClusterClient.from_kubeconfig(settings.kubeconfig)
        results.append(CheckResult("kubeconfig", True, str(settings.kubeconfig)))
    except RuntimeError as err:
        results.append(CheckResult("kubeconfig", False, str(err)))

    if cluster is not None:
        try:
            results.extend(_cluster_checks(settings, cluster))
        finally:
            cluster.close()
    if cli is not None:
        results.extend(_cli_checks(cli))

    for name in REQUIRED_FIXTURES:
        results.append(
            _check(f"fixture {name}", lambda name=name: _fixture_services(settings, name))
        )
    return results


def display_results(results: list[CheckResult]) -> bool:
    """Print a results table and return whether every check passed."""
    console.print(Panel.fit("Preflight checks", style="bold blue"))
    table = Table(show_header=True, header_style="bold")
    table.add_column("Check")
    table.add_column("Result")
    table.add_column("Detail", overflow="fold")
    for result in results:
        mark = "[green]✓ pass[/green]" if result.passed else "[red]✗ fail[/red]"
        table.add_row(result.name, mark, result.detail)
    console.print(table)

    failed = [r for r in results if not r.passed]
    if failed:
        console.print(f"[red]❌ {len(failed)} of {len(results)} checks failed[/red]")
        return False
    console.print(f"[green]✅ All {len(results)} checks passed[/green]")
    return True
