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

"""Namespaces, API coordinates, fixture names, and polling budgets."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import NamedTuple

# -- Resolved paths --
# Scenario modules and fixtures live beside the package in the source checkout;
# install with `pip install -e .` or point LISSTO_E2E_FIXTURES_DIR and
# `run --tests-dir` elsewhere.
PACKAGE_DIR = Path(__file__).resolve().parent
REPO_DIR = PACKAGE_DIR.parent
DEFAULT_FIXTURES_DIR = REPO_DIR / "fixtures"
E2E_TESTS_DIR = REPO_DIR / "tests" / "e2e"


class Role(str, Enum):
    """Fixed identities the suite drives the CLI as."""

    ADMIN = "admin"
    DEPLOY = "deploy"
    USER = "user"


class CustomKind(NamedTuple):
    """Group/version/plural coordinates of a Lissto custom resource."""

    group: str
    version: str
    plural: str

    @property
    def api_version(self) -> str:
        return f"{self.group}/{self.version}"


# -- Lissto custom resources --
LISSTO_API_GROUP = "env.lissto.dev"
LISSTO_API_VERSION = "v1alpha1"
BLUEPRINT_KIND = CustomKind(LISSTO_API_GROUP, LISSTO_API_VERSION, "blueprints")
STACK_KIND = CustomKind(LISSTO_API_GROUP, LISSTO_API_VERSION, "stacks")
ENV_KIND = CustomKind(LISSTO_API_GROUP, LISSTO_API_VERSION, "envs")

# -- Annotations --
ANNOTATION_REPOSITORY = "lissto.dev/repository"
ANNOTATION_SERVICES = "lissto.dev/services"

# -- Namespaces --
NS_LISSTO_SYSTEM = "lissto-system"
NS_GLOBAL = "lissto-global"
USER_NAMESPACE_PREFIX = "dev-"

# -- Platform deployments --
DEPLOYMENT_API = "lissto-api"
DEPLOYMENT_CONTROLLER = "lissto-controller"
PLATFORM_DEPLOYMENTS = (DEPLOYMENT_API, DEPLOYMENT_CONTROLLER)

# -- Stack-derived resource naming --
WEB_SERVICE_SUFFIX = "-web"
MANIFESTS_CONFIGMAP_SUFFIX = "-manifests"
STACK_PHASE_RUNNING = "Running"

# -- CLI output --
ID_LABEL = "ID:"

# -- Fixtures --
FIXTURE_SIMPLE_NGINX = "simple-nginx.yaml"
FIXTURE_MULTI_SERVICE = "multi-service.yaml"
REQUIRED_FIXTURES = (FIXTURE_SIMPLE_NGINX, FIXTURE_MULTI_SERVICE)

# -- Defaults --
DEFAULT_CLI_BINARY = "lissto"
DEFAULT_CLI_TIMEOUT_SECONDS = 120
DEFAULT_USERNAME = "e2e-user"
DEFAULT_ADMIN_CONTEXT = "e2e-admin"
DEFAULT_DEPLOY_CONTEXT = "e2e-deploy"
DEFAULT_USER_CONTEXT = "e2e-user"
DEFAULT_TEST_REPOSITORY = "https://github.com/lissto-dev/e2e"
DEFAULT_TEST_BRANCH = "main"
DEFAULT_ENV_NAME = "e2e"

# -- Pending image-update contract --
UPDATED_WEB_IMAGE = "nginx:1.25"

# -- Polling budgets (timeout, interval) in seconds --
DEPLOYMENT_READY_TIMEOUT, DEPLOYMENT_READY_INTERVAL = 60, 5
WORKLOAD_READY_TIMEOUT, WORKLOAD_READY_INTERVAL = 120, 5
ANNOTATION_TIMEOUT, ANNOTATION_INTERVAL = 30, 2
BLUEPRINT_EXISTS_TIMEOUT, BLUEPRINT_EXISTS_INTERVAL = 30, 2
STACK_EXISTS_TIMEOUT, STACK_EXISTS_INTERVAL = 60, 2
DEPLOYMENT_APPEAR_TIMEOUT, DEPLOYMENT_APPEAR_INTERVAL = 60, 5
CHILD_APPEAR_TIMEOUT, CHILD_APPEAR_INTERVAL = 30, 2
PHASE_TIMEOUT, PHASE_INTERVAL = 120, 5
DELETION_TIMEOUT, DELETION_INTERVAL = 60, 5
BLUEPRINT_DELETION_TIMEOUT, BLUEPRINT_DELETION_INTERVAL = 30, 2
IMAGE_ROLLOUT_TIMEOUT, IMAGE_ROLLOUT_INTERVAL = 60, 5
CUSTOM_OBJECT_POLL_INTERVAL = 2

# -- Scenario groups (module name per group) --
SCENARIO_GROUPS = {
    "setup": "test_01_setup.py",
    "blueprint": "test_02_blueprint.py",
    "stack": "test_03_stack.py",
    "image-update": "test_04_image_update.py",
    "cleanup": "test_05_cleanup.py",
}
