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

"""Identifier parsing, resource naming, and command checks."""

from __future__ import annotations

from typing import NamedTuple

import sh

from lissto_e2e.constants import (
    ID_LABEL,
    MANIFESTS_CONFIGMAP_SUFFIX,
    USER_NAMESPACE_PREFIX,
    WEB_SERVICE_SUFFIX,
)


class ScopedID(NamedTuple):
    """A ``namespace/name`` identifier as printed by the CLI."""

    namespace: str
    name: str

    def __str__(self) -> str:
        return f"{self.namespace}/{self.name}"


def extract_id(output: str) -> str:
    """Recover a created entity's identifier from CLI output.

    The first line starting with ``ID:`` wins; the text after its first colon
    is the identifier. Output without such a line is taken to be the bare
    identifier.

    Args:
        output: Captured stdout of a create command.

    Returns:
        The trimmed identifier.
    """
    for line in output.splitlines():
        if line.strip().startswith(ID_LABEL):
            return line.split(":", 1)[1].strip()
    return output.strip()


def split_scoped_id(identifier: str) -> ScopedID:
    """Split a ``namespace/name`` identifier.

    Raises:
        ValueError: If the identifier is not exactly two non-empty parts.
    """
    parts = identifier.split("/")
    if len(parts) != 2 or not all(parts):
        raise ValueError(f"identifier {identifier!r} is not in namespace/name form")
    return ScopedID(parts[0], parts[1])


def stack_name_from_id(identifier: str) -> str:
    """Return the Stack name from a scoped or bare Stack identifier."""
    parts = identifier.split("/")
    if len(parts) == 2:
        return parts[1]
    return identifier


def user_namespace(username: str) -> str:
    return USER_NAMESPACE_PREFIX + username


def web_resource_name(stack_name: str) -> str:
    """Name of the Deployment and Service derived from a Stack's web service."""
    return stack_name + WEB_SERVICE_SUFFIX


def manifests_configmap_names(stack_name: str) -> tuple[str, str]:
    """Candidate names of the manifests ConfigMap owned by a Stack."""
    return stack_name + MANIFESTS_CONFIGMAP_SUFFIX, stack_name


def require_command(cmd: str) -> str:
    """Check if a command exists on the system PATH.

    Args:
        cmd: Name of the CLI command to check.

    Returns:
        Absolute path of the command.

    Raises:
        RuntimeError: If the command is not found.
    """
    try:
        path = sh.which(cmd)
    except sh.ErrorReturnCode as err:
        raise RuntimeError(f"Required command '{cmd}' not found. Please install it first.") from err
    if not path:
        raise RuntimeError(f"Required command '{cmd}' not found. Please install it first.")
    return str(path).strip()
