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

"""Cleanup subcommand: remove Stacks left behind in the user namespace."""

from __future__ import annotations

import typer
from rich.panel import Panel

from lissto_e2e import console, logger
from lissto_e2e.cluster import ClusterClient
from lissto_e2e.config import E2ESettings
from lissto_e2e.constants import DELETION_INTERVAL, DELETION_TIMEOUT
from lissto_e2e.polling import eventually_absent
from lissto_e2e.runner import LisstoCLI


def delete_user_stacks(settings: E2ESettings, cli: LisstoCLI, cluster: ClusterClient, dry_run: bool = False) -> list[str]:
    """Delete every Stack in the user namespace and wait for each to go.

    Args:
        settings: Resolved suite settings.
        cli: CLI runner used to delete as the user role.
        cluster: Accessor used to list Stacks and await their absence.
        dry_run: List what would be deleted without deleting.

    Returns:
        Names of the Stacks deleted (or that would be deleted).
    """
    namespace = settings.user_namespace
    names = [stack.metadata.name for stack in cluster.list_stacks(namespace)]
    if not names:
        console.print(f"[green]✅ No stacks in {namespace}[/green]")
        return []

    for name in names:
        if dry_run:
            console.print(f"[yellow]   would delete stack {namespace}/{name}[/yellow]")
            continue
        console.print(f"[yellow]ℹ️  Deleting stack {namespace}/{name}...[/yellow]")
        cli.stack_delete(name)
        eventually_absent(
            lambda name=name: cluster.stack_exists(namespace, name),
            timeout=DELETION_TIMEOUT,
            interval=DELETION_INTERVAL,
            description=f"stack {namespace}/{name}",
        )
        logger.info("Deleted stack %s/%s", namespace, name)
    if not dry_run:
        console.print(f"[green]✅ Deleted {len(names)} stacks from {namespace}[/green]")
    return names


def cleanup(
    dry_run: bool = typer.Option(False, "--dry-run", help="List stacks without deleting them"),
) -> None:
    """Delete Stacks left in the e2e user's namespace."""
    settings = E2ESettings()
    console.print(Panel.fit(f"Cleaning up {settings.user_namespace}", style="bold blue"))
    cli = LisstoCLI.from_settings(settings)
    cluster = ClusterClient.from_kubeconfig(settings.kubeconfig)
    try:
        delete_user_stacks(settings, cli, cluster, dry_run=dry_run)
    finally:
        cluster.close()
