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

"""Preflight subcommand."""

from __future__ import annotations

from pathlib import Path

import typer

from lissto_e2e.config import E2ESettings, display_config
from lissto_e2e.preflight import display_results, run_preflight


def resolve_settings(kubeconfig: Path | None, cli_binary: str | None) -> E2ESettings:
    """Apply CLI overrides on top of LISSTO_E2E_* env vars and defaults."""
    settings = E2ESettings()
    overrides: dict = {}
    if kubeconfig is not None:
        overrides["kubeconfig"] = kubeconfig
    if cli_binary is not None:
        overrides["cli_binary"] = cli_binary
    if overrides:
        settings = settings.model_copy(update=overrides)
    return settings


def preflight(
    kubeconfig: Path | None = typer.Option(
        None, "--kubeconfig", help="Kubeconfig file (overrides KUBECONFIG)"),
    cli_binary: str | None = typer.Option(
        None, "--cli-binary", help="lissto binary name or path"),
) -> None:
    """Check the CLI, cluster, contexts, and fixtures before a run."""
    settings = resolve_settings(kubeconfig, cli_binary)
    display_config(settings)
    if not display_results(run_preflight(settings)):
        raise typer.Exit(code=1)
