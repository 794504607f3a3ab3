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

"""Session fixtures for the scenario suite."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

from lissto_e2e.cluster import ClusterClient
from lissto_e2e.config import E2ESettings
from lissto_e2e.runner import LisstoCLI

LOGGER = logging.getLogger(__name__)


@pytest.fixture(scope="session")
def settings() -> E2ESettings:
    resolved = E2ESettings()
    LOGGER.info(
        "Suite settings: binary=%s kubeconfig=%s user_namespace=%s",
        resolved.cli_binary, resolved.kubeconfig, resolved.user_namespace,
    )
    return resolved


@pytest.fixture(scope="session")
def cli(settings: E2ESettings) -> LisstoCLI:
    """CLI runner; fails every dependent test when the binary is missing."""
    try:
        return LisstoCLI.from_settings(settings)
    except RuntimeError as err:
        pytest.fail(str(err), pytrace=False)


@pytest.fixture(scope="session")
def cluster(settings: E2ESettings) -> Iterator[ClusterClient]:
    try:
        client = ClusterClient.from_kubeconfig(settings.kubeconfig)
    except RuntimeError as err:
        pytest.fail(f"Failed to create K8s client: {err}", pytrace=False)
    yield client
    client.close()


@pytest.fixture(scope="session")
def user_namespace(settings: E2ESettings) -> str:
    return settings.user_namespace
