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

"""Compose fixtures submitted as Blueprints."""

from __future__ import annotations

from pathlib import Path

import yaml


def fixture_path(fixtures_dir: Path, name: str) -> Path:
    """Return the absolute path of fixture *name*."""
    return (fixtures_dir / name).resolve()


def fixture_exists(fixtures_dir: Path, name: str) -> bool:
    return fixture_path(fixtures_dir, name).is_file()


def read_fixture(fixtures_dir: Path, name: str) -> str:
    return fixture_path(fixtures_dir, name).read_text()


def compose_services(fixtures_dir: Path, name: str) -> list[str]:
    """Return the service names declared by a compose fixture.

    Raises:
        ValueError: If the fixture is not a compose document with services.
    """
    document = yaml.safe_load(read_fixture(fixtures_dir, name))
    if not isinstance(document, dict) or not isinstance(document.get("services"), dict):
        raise ValueError(f"fixture {name} has no services mapping")
    return list(document["services"])
