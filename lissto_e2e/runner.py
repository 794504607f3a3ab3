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

"""Role-scoped invocation of the lissto CLI."""

from __future__ import annotations

import threading
from collections.abc import Sequence

import sh

from lissto_e2e import logger
from lissto_e2e.config import E2ESettings
from lissto_e2e.constants import Role
from lissto_e2e.utils import require_command

# The CLI keeps its current context in a per-user config file, so a context
# switch and the command that follows must not interleave with another pair.
_CONTEXT_LOCK = threading.Lock()


def _decode(stream: bytes | str | None) -> str:
    if stream is None:
        return ""
    if isinstance(stream, bytes):
        return stream.decode("utf-8", errors="replace")
    return stream


class CLIError(RuntimeError):
    """A lissto invocation exited non-zero, timed out, or could not start.

    Attributes:
        args_list: Arguments passed to the binary.
        exit_code: Process exit code, or None when it never exited normally.
        stdout: Captured standard output, verbatim.
        stderr: Captured standard error, verbatim.
    """

    def __init__(
        self,
        args_list: Sequence[str],
        exit_code: int | None,
        stdout: str,
        stderr: str,
        reason: str = "",
    ) -> None:
        self.args_list = list(args_list)
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr
        reason = reason or f"exit status {exit_code}"
        super().__init__(
            f"command failed: lissto {' '.join(self.args_list)}: {reason}\n"
            f"stderr: {stderr}\nstdout: {stdout}"
        )

    @property
    def output(self) -> str:
        """Both streams joined, for matching on error text."""
        return f"{self.stderr}\n{self.stdout}"


class ContextSwitchError(CLIError):
    """`context use` failed, so the requested command never ran."""


class LisstoCLI:
    """Runs lissto commands, switching the CLI context per call.

    Args:
        binary: Name on PATH, or absolute path, of the lissto binary.
        contexts: CLI context name for each role.
        timeout: Seconds before a single invocation is killed.
    """

    def __init__(self, binary: str, contexts: dict[Role, str], timeout: int) -> None:
        self.binary_path = require_command(binary)
        self.contexts = dict(contexts)
        self.timeout = timeout
        self._command = sh.Command(self.binary_path)

    @classmethod
    def from_settings(cls, settings: E2ESettings) -> LisstoCLI:
        contexts = {role: settings.context_for(role) for role in Role}
        return cls(settings.cli_binary, contexts, settings.cli_timeout)

    def _execute(self, *args: str) -> str:
        logger.debug("Running: lissto %s", " ".join(args))
        try:
            result = self._command(*args, _tty_out=False, _timeout=self.timeout)
        except sh.TimeoutException as err:
            raise CLIError(
                args, None, "", "", reason=f"timed out after {self.timeout}s",
            ) from err
        except sh.ErrorReturnCode as err:
            raise CLIError(
                args, err.exit_code, _decode(err.stdout), _decode(err.stderr),
            ) from err
        return str(result)

    def run(self, *args: str) -> str:
        """Run a command against whatever context is current."""
        return self._execute(*args)

    def run_as(self, role: Role, *args: str) -> str:
        """Switch to *role*'s context, then run the command.

        Raises:
            ContextSwitchError: If the context switch fails; the command is
                not run.
            CLIError: If the command fails.
        """
        context = self.contexts[Role(role)]
        with _CONTEXT_LOCK:
            try:
                self._execute("context", "use", context)
            except CLIError as err:
                raise ContextSwitchError(
                    err.args_list, err.exit_code, err.stdout, err.stderr,
                    reason=f"failed to switch to context {context}",
                ) from err
            return self._execute(*args)

    def current_context(self) -> str:
        return self.run("context", "current").strip()

    # ------------------------------------------------------------------
    # Blueprints
    # ------------------------------------------------------------------

    def blueprint_create(
        self,
        compose_path: str,
        repository: str | None = None,
        role: Role = Role.USER,
    ) -> str:
        """Create a Blueprint; as the user role it lands in the user namespace."""
        args = ["blueprint", "create", compose_path]
        if repository:
            args += ["--repository", repository]
        return self.run_as(role, *args)

    def blueprint_create_global(
        self,
        compose_path: str,
        repository: str | None = None,
        branch: str | None = None,
    ) -> str:
        """Create a global Blueprint as the deploy role."""
        args = ["blueprint", "create", compose_path]
        if repository:
            args += ["--repository", repository]
        if branch:
            args += ["--branch", branch]
        return self.run_as(Role.DEPLOY, *args)

    def blueprint_list(self, role: Role = Role.USER) -> str:
        return self.run_as(role, "blueprint", "list")

    def blueprint_get(self, blueprint_id: str, role: Role = Role.USER) -> str:
        return self.run_as(role, "blueprint", "get", blueprint_id)

    def blueprint_delete(self, blueprint_id: str, role: Role = Role.ADMIN) -> str:
        return self.run_as(role, "blueprint", "delete", blueprint_id)

    # ------------------------------------------------------------------
    # Envs
    # ------------------------------------------------------------------

    def env_create(self, name: str) -> str:
        return self.run_as(Role.USER, "env", "create", name)

    def env_use(self, name: str) -> str:
        return self.run_as(Role.USER, "env", "use", name)

    def env_exists(self, name: str) -> bool:
        try:
            self.run_as(Role.USER, "env", "get", name)
        except CLIError:
            return False
        return True

    def ensure_env(self, name: str) -> None:
        """Select environment *name*, creating it first if needed."""
        try:
            self.env_use(name)
            return
        except CLIError:
            logger.info("Environment %s not selectable, creating it", name)
        self.env_create(name)
        self.env_use(name)

    # ------------------------------------------------------------------
    # Stacks
    # ------------------------------------------------------------------

    def stack_create(self, blueprint_id: str, role: Role = Role.USER) -> str:
        return self.run_as(role, "stack", "create", blueprint_id)

    def stack_list(self, role: Role = Role.USER) -> str:
        return self.run_as(role, "stack", "list")

    def stack_get(self, name: str, role: Role = Role.USER) -> str:
        return self.run_as(role, "stack", "get", name)

    def stack_delete(self, name: str, role: Role = Role.USER) -> str:
        return self.run_as(role, "stack", "delete", name)

    def stack_update_image(self, name: str, service: str, image: str) -> str:
        """Point *service* of a Stack at a new image.

        The CLI does not ship ``stack update`` yet; the image-update
        scenarios that call this are skipped until it does.
        """
        return self.run_as(Role.USER, "stack", "update", name, "--image", f"{service}={image}")
