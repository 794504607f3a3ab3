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

"""Single-shot reads of cluster state through the Kubernetes API.

Built-in kinds go through the typed ``CoreV1Api``/``AppsV1Api`` clients and
Lissto's custom kinds through ``CustomObjectsApi``, which returns plain
dictionaries that are then validated into the models in
:mod:`lissto_e2e.models`. Nothing here waits; wrap calls in
:func:`lissto_e2e.polling.eventually` to await convergence.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

from kubernetes import client, config
from kubernetes.config import ConfigException

from lissto_e2e import logger
from lissto_e2e.constants import (
    BLUEPRINT_KIND,
    CUSTOM_OBJECT_POLL_INTERVAL,
    ENV_KIND,
    STACK_KIND,
    CustomKind,
)
from lissto_e2e.models import Blueprint, Env, Stack
from lissto_e2e.polling import TRANSIENT_ERRORS, eventually, eventually_absent


class ClusterClient:
    """Read-only accessor over the cluster the platform runs in."""

    def __init__(self, api_client: client.ApiClient) -> None:
        self.api_client = api_client
        self.core = client.CoreV1Api(api_client)
        self.apps = client.AppsV1Api(api_client)
        self.custom = client.CustomObjectsApi(api_client)

    @classmethod
    def from_kubeconfig(cls, kubeconfig: Path) -> ClusterClient:
        """Build a client from a kubeconfig file.

        Args:
            kubeconfig: Path of the kubeconfig to load.

        Raises:
            RuntimeError: If the kubeconfig cannot be loaded.
        """
        try:
            api_client = config.new_client_from_config(config_file=str(kubeconfig))
        except (ConfigException, OSError) as err:
            raise RuntimeError(f"failed to build kubeconfig from {kubeconfig}: {err}") from err
        return cls(api_client)

    def close(self) -> None:
        self.api_client.close()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _exists(probe: Callable[[], Any], what: str) -> bool:
        try:
            probe()
        except TRANSIENT_ERRORS as err:
            logger.debug("%s not readable: %s", what, err)
            return False
        return True

    def _get_custom(self, kind: CustomKind, namespace: str, name: str) -> dict[str, Any]:
        return self.custom.get_namespaced_custom_object(
            kind.group, kind.version, namespace, kind.plural, name,
        )

    def _list_custom(self, kind: CustomKind, namespace: str) -> list[dict[str, Any]]:
        result = self.custom.list_namespaced_custom_object(
            kind.group, kind.version, namespace, kind.plural,
        )
        return result.get("items") or []

    def custom_object_exists(self, kind: CustomKind, namespace: str, name: str) -> bool:
        return self._exists(
            lambda: self._get_custom(kind, namespace, name),
            f"{kind.plural}/{name} in {namespace}",
        )

    # ------------------------------------------------------------------
    # Namespaces
    # ------------------------------------------------------------------

    def namespace_exists(self, name: str) -> bool:
        return self._exists(lambda: self.core.read_namespace(name), f"namespace {name}")

    # ------------------------------------------------------------------
    # Blueprints, Stacks, Envs
    # ------------------------------------------------------------------

    def list_blueprints(self, namespace: str) -> list[Blueprint]:
        """List Blueprints in *namespace*; raises if the kind is not served."""
        return [Blueprint.model_validate(obj) for obj in self._list_custom(BLUEPRINT_KIND, namespace)]

    def get_blueprint(self, namespace: str, name: str) -> Blueprint:
        return Blueprint.model_validate(self._get_custom(BLUEPRINT_KIND, namespace, name))

    def blueprint_exists(self, namespace: str, name: str) -> bool:
        return self.custom_object_exists(BLUEPRINT_KIND, namespace, name)

    def get_blueprint_annotation(self, namespace: str, name: str, key: str) -> str:
        """Return a Blueprint annotation, or ``""`` when the key is absent.

        Raises:
            ApiException: If the Blueprint itself cannot be read.
        """
        return self.get_blueprint(namespace, name).annotation(key)

    def list_stacks(self, namespace: str) -> list[Stack]:
        """List Stacks in *namespace*; raises if the kind is not served."""
        return [Stack.model_validate(obj) for obj in self._list_custom(STACK_KIND, namespace)]

    def get_stack(self, namespace: str, name: str) -> Stack:
        return Stack.model_validate(self._get_custom(STACK_KIND, namespace, name))

    def stack_exists(self, namespace: str, name: str) -> bool:
        return self.custom_object_exists(STACK_KIND, namespace, name)

    def get_stack_phase(self, namespace: str, name: str) -> str:
        """Return ``status.phase`` of a Stack, or ``""`` when not reported.

        Raises:
            ApiException: If the Stack itself cannot be read.
        """
        return self.get_stack(namespace, name).phase

    def get_env(self, namespace: str, name: str) -> Env:
        return Env.model_validate(self._get_custom(ENV_KIND, namespace, name))

    def env_exists(self, namespace: str, name: str) -> bool:
        return self.custom_object_exists(ENV_KIND, namespace, name)

    # ------------------------------------------------------------------
    # Workloads
    # ------------------------------------------------------------------

    def get_deployment(self, namespace: str, name: str) -> client.V1Deployment:
        return self.apps.read_namespaced_deployment(name, namespace)

    def deployment_exists(self, namespace: str, name: str) -> bool:
        return self._exists(
            lambda: self.get_deployment(namespace, name), f"deployment {namespace}/{name}",
        )

    def deployment_ready(self, namespace: str, name: str) -> bool:
        """Return whether every desired replica of a Deployment is ready.

        A Deployment that cannot be read is not ready.
        """
        try:
            deployment = self.get_deployment(namespace, name)
        except TRANSIENT_ERRORS as err:
            logger.debug("deployment %s/%s not readable: %s", namespace, name, err)
            return False
        desired = deployment.spec.replicas if deployment.spec.replicas is not None else 1
        ready = (deployment.status.ready_replicas if deployment.status else None) or 0
        return ready == desired

    def get_deployment_image(self, namespace: str, name: str) -> str:
        """Return the image of the first container of a Deployment.

        Raises:
            RuntimeError: If the pod template has no containers.
        """
        deployment = self.get_deployment(namespace, name)
        containers = deployment.spec.template.spec.containers or []
        if not containers:
            raise RuntimeError(f"deployment {namespace}/{name} has no containers")
        return containers[0].image

    def get_service(self, namespace: str, name: str) -> client.V1Service:
        return self.core.read_namespaced_service(name, namespace)

    def service_exists(self, namespace: str, name: str) -> bool:
        return self._exists(
            lambda: self.get_service(namespace, name), f"service {namespace}/{name}",
        )

    def get_config_map(self, namespace: str, name: str) -> client.V1ConfigMap:
        return self.core.read_namespaced_config_map(name, namespace)

    def config_map_exists(self, namespace: str, name: str) -> bool:
        return self._exists(
            lambda: self.get_config_map(namespace, name), f"configmap {namespace}/{name}",
        )

    def list_pods(self, namespace: str, label_selector: str = "") -> list[client.V1Pod]:
        return self.core.list_namespaced_pod(namespace, label_selector=label_selector).items

    # ------------------------------------------------------------------
    # Waiting on custom objects
    # ------------------------------------------------------------------

    def wait_for_custom_object(self, kind: CustomKind, namespace: str, name: str, timeout: float) -> None:
        """Poll every two seconds until a custom object exists."""
        eventually(
            lambda: self.custom_object_exists(kind, namespace, name),
            timeout=timeout,
            interval=CUSTOM_OBJECT_POLL_INTERVAL,
            description=f"{kind.plural}/{name} in namespace {namespace}",
        )

    def wait_for_custom_object_deletion(
        self, kind: CustomKind, namespace: str, name: str, timeout: float,
    ) -> None:
        """Poll every two seconds until a custom object is gone."""
        eventually_absent(
            lambda: self.custom_object_exists(kind, namespace, name),
            timeout=timeout,
            interval=CUSTOM_OBJECT_POLL_INTERVAL,
            description=f"{kind.plural}/{name} in namespace {namespace}",
        )
