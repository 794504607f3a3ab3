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

"""Typed views over the unstructured Lissto custom objects.

Objects come back from the API as nested dictionaries. These models give the
fields the suite asserts on a typed home; every field is optional so that a
partially reconciled object still validates.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class _LisstoModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class ObjectMeta(_LisstoModel):
    name: str = ""
    namespace: str = ""
    annotations: dict[str, str] | None = None


class ImageInfo(_LisstoModel):
    image: str | None = None


class Blueprint(_LisstoModel):
    """A content-addressed application template."""

    metadata: ObjectMeta = Field(default_factory=ObjectMeta)

    @property
    def scoped_id(self) -> str:
        return f"{self.metadata.namespace}/{self.metadata.name}"

    def annotation(self, key: str) -> str:
        """Return the annotation value, or an empty string when unset."""
        return (self.metadata.annotations or {}).get(key) or ""


class StackSpec(_LisstoModel):
    blueprint_reference: str | None = Field(default=None, alias="blueprintReference")
    images: dict[str, ImageInfo] | None = None


class StackStatus(_LisstoModel):
    phase: str | None = None


class Stack(_LisstoModel):
    """A running instance of a Blueprint."""

    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    spec: StackSpec | None = None
    status: StackStatus | None = None

    @property
    def phase(self) -> str:
        """Return ``status.phase``, or an empty string when not reported yet."""
        if self.status is None:
            return ""
        return self.status.phase or ""

    @property
    def blueprint_reference(self) -> str:
        if self.spec is None:
            return ""
        return self.spec.blueprint_reference or ""

    def image_for(self, service: str) -> str:
        """Return the image recorded in the spec for *service*, or ``""``."""
        if self.spec is None or not self.spec.images:
            return ""
        info = self.spec.images.get(service)
        if info is None:
            return ""
        return info.image or ""


class Env(_LisstoModel):
    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
