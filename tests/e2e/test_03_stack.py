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

"""
Stack lifecycle.

Only the user role may create Stacks. A Stack always lands in the creator's
user namespace, whether its Blueprint is user-scoped or global, and it
materializes a ``<stack>-web`` Deployment and Service plus a manifests
ConfigMap before converging to the Running phase.
"""

from __future__ import annotations

import logging
from types import SimpleNamespace

import pytest

from lissto_e2e.constants import (
    CHILD_APPEAR_INTERVAL,
    CHILD_APPEAR_TIMEOUT,
    DEPLOYMENT_APPEAR_INTERVAL,
    DEPLOYMENT_APPEAR_TIMEOUT,
    PHASE_INTERVAL,
    PHASE_TIMEOUT,
    STACK_PHASE_RUNNING,
    WORKLOAD_READY_INTERVAL,
    WORKLOAD_READY_TIMEOUT,
    Role,
)
from lissto_e2e.polling import eventually, eventually_equal
from lissto_e2e.runner import CLIError
from lissto_e2e.utils import extract_id, manifests_configmap_names, stack_name_from_id, web_resource_name
from tests.e2e.scenario import assert_refused, create_global_blueprint, create_user_blueprint, wait_for_stack

LOGGER = logging.getLogger(__name__)

pytestmark = [pytest.mark.e2e]

SOURCES = ["user-blueprint", "global-blueprint"]


@pytest.mark.ordered
class TestStackLifecycle:
    """Who may create Stacks, where they land, and what they materialize."""

    @pytest.fixture(scope="class")
    def state(self, cli, settings) -> SimpleNamespace:
        cli.ensure_env(settings.env_name)
        return SimpleNamespace(
            blueprints={
                "user-blueprint": create_user_blueprint(cli, settings),
                "global-blueprint": create_global_blueprint(cli, settings),
            },
            stacks={},
        )

    @pytest.mark.parametrize("role", [Role.ADMIN, Role.DEPLOY], ids=lambda role: role.value)
    def test_role_cannot_create_stack(self, cli, state, role) -> None:
        with pytest.raises(CLIError) as excinfo:
            cli.stack_create(str(state.blueprints["global-blueprint"]), role=role)
        assert_refused(excinfo.value, "stack", "create")

    @pytest.mark.parametrize("source", SOURCES)
    def test_user_creates_stack(self, cli, user_namespace, state, source) -> None:
        output = cli.stack_create(str(state.blueprints[source]))
        stack_id = extract_id(output)
        assert stack_id, f"stack ID should be returned: {output!r}"
        if "/" in stack_id:
            assert stack_id.split("/")[0] == user_namespace, (
                f"stack {stack_id} should be created in {user_namespace}"
            )
        state.stacks[source] = stack_name_from_id(stack_id)
        LOGGER.info("Created stack: %s (name: %s)", stack_id, state.stacks[source])

    @pytest.mark.parametrize("source", SOURCES)
    def test_stack_in_user_namespace(self, cluster, user_namespace, state, source) -> None:
        wait_for_stack(cluster, user_namespace, state.stacks[source])

    @pytest.mark.parametrize("source", SOURCES)
    def test_stack_references_blueprint(self, cluster, user_namespace, state, source) -> None:
        stack = cluster.get_stack(user_namespace, state.stacks[source])
        assert stack.spec is not None, "stack should have spec"
        assert stack.blueprint_reference == str(state.blueprints[source]), (
            "stack should reference correct blueprint"
        )

    @pytest.mark.parametrize("source", SOURCES)
    def test_web_deployment_created(self, cluster, user_namespace, state, source) -> None:
        name = web_resource_name(state.stacks[source])
        eventually(
            lambda: cluster.deployment_exists(user_namespace, name),
            timeout=DEPLOYMENT_APPEAR_TIMEOUT,
            interval=DEPLOYMENT_APPEAR_INTERVAL,
            description=f"deployment {user_namespace}/{name}",
        )

    @pytest.mark.parametrize("source", SOURCES)
    def test_web_service_created(self, cluster, user_namespace, state, source) -> None:
        name = web_resource_name(state.stacks[source])
        eventually(
            lambda: cluster.service_exists(user_namespace, name),
            timeout=CHILD_APPEAR_TIMEOUT,
            interval=CHILD_APPEAR_INTERVAL,
            description=f"service {user_namespace}/{name}",
        )

    @pytest.mark.parametrize("source", SOURCES)
    def test_manifests_configmap_created(self, cluster, user_namespace, state, source) -> None:
        candidates = manifests_configmap_names(state.stacks[source])
        eventually(
            lambda: any(cluster.config_map_exists(user_namespace, name) for name in candidates),
            timeout=CHILD_APPEAR_TIMEOUT,
            interval=CHILD_APPEAR_INTERVAL,
            description=f"manifests configmap ({' or '.join(candidates)}) in {user_namespace}",
        )

    @pytest.mark.parametrize("source", SOURCES)
    def test_stack_reaches_running(self, cluster, user_namespace, state, source) -> None:
        name = state.stacks[source]
        eventually_equal(
            lambda: cluster.get_stack_phase(user_namespace, name),
            STACK_PHASE_RUNNING,
            timeout=PHASE_TIMEOUT,
            interval=PHASE_INTERVAL,
            description=f"phase of stack {user_namespace}/{name}",
        )

    @pytest.mark.parametrize("source", SOURCES)
    def test_web_deployment_ready(self, cluster, user_namespace, state, source) -> None:
        name = web_resource_name(state.stacks[source])
        eventually(
            lambda: cluster.deployment_ready(user_namespace, name),
            timeout=WORKLOAD_READY_TIMEOUT,
            interval=WORKLOAD_READY_INTERVAL,
            description=f"deployment {user_namespace}/{name} ready",
        )

    @pytest.mark.parametrize("role", [Role.USER, Role.ADMIN], ids=lambda role: role.value)
    def test_stack_list_contains_stacks(self, cli, state, role) -> None:
        output = cli.stack_list(role=role)
        for name in state.stacks.values():
            assert name in output, f"stack list as {role.value} should contain {name}"

    def test_user_gets_stack(self, cli, state) -> None:
        output = cli.stack_get(state.stacks["user-blueprint"])
        assert output.strip(), "stack get should return data"
