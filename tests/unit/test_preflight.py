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

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from lissto_e2e.config import E2ESettings
from lissto_e2e.constants import DEFAULT_FIXTURES_DIR, Role
from lissto_e2e.preflight import CheckResult, display_results, run_preflight


def _unavailable(message):
    def factory(*_args, **_kwargs):
        raise RuntimeError(message)

    return factory


def _fake_cli(settings, stuck_on=None):
    """CLI double whose current context follows ``context use`` unless stuck."""
    cli = MagicMock()
    cli.binary_path = "/usr/local/bin/lissto"
    cli.contexts = {role: settings.context_for(role) for role in Role}
    state = {"current": ""}

    def run(*args):
        if args[:2] == ("context", "use") and args[2] != stuck_on:
            state["current"] = args[2]
        return ""

    cli.run.side_effect = run
    cli.current_context.side_effect = lambda: state["current"]
    return cli


@pytest.fixture
def settings(tmp_path):
    return E2ESettings(
        cli_config_dir=tmp_path,
        kubeconfig=tmp_path / "kubeconfig",
        fixtures_dir=DEFAULT_FIXTURES_DIR,
    )


def _by_name(results):
    return {result.name: result for result in results}


def test_preflight_without_binary_or_cluster(settings, monkeypatch):
    monkeypatch.setattr("lissto_e2e.preflight.LisstoCLI.from_settings", _unavailable("lissto not found"))
    monkeypatch.setattr("lissto_e2e.preflight.ClusterClient.from_kubeconfig", _unavailable("bad kubeconfig"))

    results = _by_name(run_preflight(settings))
    assert results["lissto binary"] == CheckResult("lissto binary", False, "lissto not found")
    assert results["kubeconfig"] == CheckResult("kubeconfig", False, "bad kubeconfig")
    assert results["cli config directory"].passed is True
    assert results["fixture simple-nginx.yaml"] == CheckResult("fixture simple-nginx.yaml", True, "web")
    assert results["fixture multi-service.yaml"].detail == "web, api, cache"
    assert not any(name.startswith(("context", "namespace")) for name in results)


def test_preflight_against_partial_platform(settings, monkeypatch):
    cluster = MagicMock()
    cluster.namespace_exists.return_value = True
    cluster.list_blueprints.return_value = []
    cluster.list_stacks.side_effect = RuntimeError("stacks.env.lissto.dev not served")
    cluster.deployment_ready.side_effect = lambda ns, name: name == "lissto-api"
    cli = _fake_cli(settings, stuck_on="e2e-deploy")
    monkeypatch.setattr("lissto_e2e.preflight.LisstoCLI.from_settings", lambda _settings: cli)
    monkeypatch.setattr("lissto_e2e.preflight.ClusterClient.from_kubeconfig", lambda _path: cluster)

    results = _by_name(run_preflight(settings))
    assert results["namespace lissto-system"].passed
    assert results["blueprints kind served"] == CheckResult("blueprints kind served", True, "0 in lissto-system")
    assert results["stacks kind served"] == CheckResult("stacks kind served", False, "stacks.env.lissto.dev not served")
    assert results["deployment lissto-api ready"].passed
    assert not results["deployment lissto-controller ready"].passed
    assert results["context e2e-admin switchable"].passed
    assert not results["context e2e-deploy switchable"].passed
    assert results["context e2e-user switchable"].passed
    cluster.close.assert_called_once()


def test_display_results(capsys):
    assert display_results([CheckResult("a", True), CheckResult("b", True, "ok")]) is True
    assert "All 2 checks passed" in capsys.readouterr().err
    assert display_results([CheckResult("a", True), CheckResult("b", False, "boom")]) is False
    assert "1 of 2 checks failed" in capsys.readouterr().err


def test_context_check_requires_exact_match(settings, monkeypatch):
    cli = _fake_cli(settings)
    cli.current_context.side_effect = lambda: "e2e-user-old"
    monkeypatch.setattr("lissto_e2e.preflight.LisstoCLI.from_settings", lambda _settings: cli)
    monkeypatch.setattr("lissto_e2e.preflight.ClusterClient.from_kubeconfig", _unavailable("bad kubeconfig"))

    result = _by_name(run_preflight(settings))["context e2e-user switchable"]
    assert result.passed is False
    assert "e2e-user-old" in result.detail
