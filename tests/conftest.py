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
Shared pytest configuration.

Scenario modules under ``tests/e2e`` carry the ``e2e`` marker and only run
with ``--e2e``. Classes marked ``ordered`` behave as a sequence of steps: once
a step fails, the remaining steps of that class are skipped.
"""

from __future__ import annotations

import pytest

_FAILED_STEPS: dict[str, str] = {}


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "--e2e",
        action="store_true",
        default=False,
        help="run scenarios against the live Lissto cluster",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    if config.getoption("--e2e"):
        return
    skip_e2e = pytest.mark.skip(reason="needs --e2e and a live Lissto cluster")
    for item in items:
        if "e2e" in item.keywords:
            item.add_marker(skip_e2e)


def _group_of(item: pytest.Item) -> str:
    return item.parent.nodeid if item.parent is not None else item.nodeid


def pytest_runtest_makereport(item: pytest.Item, call: pytest.CallInfo) -> None:
    if "ordered" not in item.keywords or call.excinfo is None:
        return
    if call.excinfo.errisinstance(pytest.skip.Exception):
        return
    _FAILED_STEPS.setdefault(_group_of(item), item.name)


def pytest_runtest_setup(item: pytest.Item) -> None:
    if "ordered" not in item.keywords:
        return
    failed = _FAILED_STEPS.get(_group_of(item))
    if failed is not None:
        pytest.skip(f"previous step failed ({failed})")
