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

"""Suite configuration and config display."""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from rich.panel import Panel

from lissto_e2e import console
from lissto_e2e.constants import (
    DEFAULT_ADMIN_CONTEXT,
    DEFAULT_CLI_BINARY,
    DEFAULT_CLI_TIMEOUT_SECONDS,
    DEFAULT_DEPLOY_CONTEXT,
    DEFAULT_ENV_NAME,
    DEFAULT_FIXTURES_DIR,
    DEFAULT_TEST_BRANCH,
    DEFAULT_TEST_REPOSITORY,
    DEFAULT_USER_CONTEXT,
    DEFAULT_USERNAME,
    NS_GLOBAL,
    NS_LISSTO_SYSTEM,
    Role,
)
from lissto_e2e.utils import user_namespace


def _default_kubeconfig() -> Path:
    """Resolve the kubeconfig path from ``KUBECONFIG`` or ``~/.kube/config``.

    Only the first entry of a path-list ``KUBECONFIG`` is used.
    """
    env_value = os.environ.get("KUBECONFIG", "")
    first = env_value.split(os.pathsep)[0] if env_value else ""
    if first:
        return Path(first).expanduser()
    return Path.home() / ".kube" / "config"


def _default_cli_config_dir() -> Path:
    return Path.home() / ".config" / "lissto"


class E2ESettings(BaseSettings):
    """E2E suite configuration, auto-loaded from LISSTO_E2E_* env vars.

    Attributes:
        cli_binary: Name on PATH, or absolute path, of the lissto binary.
        cli_config_dir: Directory holding the CLI's contexts.
        cli_timeout: Seconds before a single CLI invocation is killed.
        kubeconfig: Kubeconfig file used for direct cluster reads.
        username: Lissto username behind the user context.
        admin_context: CLI context name for the admin role.
        deploy_context: CLI context name for the deploy role.
        user_context: CLI context name for the user role.
        test_repository: Repository URL attached to created Blueprints.
        test_branch: Branch qualifier for global Blueprints.
        env_name: Environment selected before creating Stacks.
        fixtures_dir: Directory holding the compose fixtures.
        system_namespace: Namespace of the Lissto platform components.
        global_namespace: Namespace of globally visible Blueprints.
    """

    model_config = SettingsConfigDict(env_prefix="LISSTO_E2E_", extra="ignore")

    cli_binary: str = DEFAULT_CLI_BINARY
    cli_config_dir: Path = Field(default_factory=_default_cli_config_dir)
    cli_timeout: int = Field(default=DEFAULT_CLI_TIMEOUT_SECONDS, ge=1, le=3600)
    kubeconfig: Path = Field(default_factory=_default_kubeconfig)
    username: str = Field(default=DEFAULT_USERNAME, min_length=1)
    admin_context: str = DEFAULT_ADMIN_CONTEXT
    deploy_context: str = DEFAULT_DEPLOY_CONTEXT
    user_context: str = DEFAULT_USER_CONTEXT
    test_repository: str = DEFAULT_TEST_REPOSITORY
    test_branch: str = DEFAULT_TEST_BRANCH
    env_name: str = DEFAULT_ENV_NAME
    fixtures_dir: Path = DEFAULT_FIXTURES_DIR
    system_namespace: str = NS_LISSTO_SYSTEM
    global_namespace: str = NS_GLOBAL

    @property
    def user_namespace(self) -> str:
        """Namespace holding the user's Blueprints and every Stack."""
        return user_namespace(self.username)

    def context_for(self, role: Role) -> str:
        """Return the CLI context name that carries *role*."""
        contexts = {
            Role.ADMIN: self.admin_context,
            Role.DEPLOY: self.deploy_context,
            Role.USER: self.user_context,
        }
        return contexts[Role(role)]


def display_config(settings: E2ESettings) -> None:
    """Print the resolved suite configuration.

    Args:
        settings: Resolved suite settings.
    """
    console.print(Panel.fit("Configuration", style="bold blue"))
    console.print("[yellow]CLI:[/yellow]")
    console.print(f"  cli_binary      : {settings.cli_binary}")
    console.print(f"  cli_config_dir  : {settings.cli_config_dir}")
    console.print(f"  contexts        : {settings.admin_context}, {settings.deploy_context}, {settings.user_context}")
    console.print("[yellow]Cluster:[/yellow]")
    console.print(f"  kubeconfig      : {settings.kubeconfig}")
    console.print(f"  user_namespace  : {settings.user_namespace}")
    console.print(f"  global_namespace: {settings.global_namespace}")
    console.print("[yellow]Fixtures:[/yellow]")
    console.print(f"  fixtures_dir    : {settings.fixtures_dir}")
    console.print(f"  repository      : {settings.test_repository}")
