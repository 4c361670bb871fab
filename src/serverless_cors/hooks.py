# Copyright 2026 Firefly Software Solutions Inc.
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
"""Host pipeline hook contract and the events the plugin receives."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from serverless_cors.model.endpoint import Endpoint
from serverless_cors.model.project import Project

ENDPOINT_BUILD_API_GATEWAY = "endpointBuildApiGateway"
ENDPOINT_DEPLOY = "endpointDeploy"

PRE = "pre"
POST = "post"

Hook = Callable[[Any], Awaitable[Any]]


@dataclass
class EndpointBuildEvent:
    """Fired once per endpoint before its API Gateway representation is built."""

    endpoint: Endpoint
    stage: str | None = None
    region: str | None = None


@dataclass
class DeployEvent:
    """Fired once per ``endpoint deploy`` run."""

    project: Project
    stage: str
    region: str | None = None
    all: bool = False
    description: str | None = None
    rest_api_id: str | None = None
    deployed: list[Endpoint] | None = None


@runtime_checkable
class HookRegistry(Protocol):
    """What the host exposes for plugins to hook into its actions."""

    def add_hook(self, hook: Hook, *, action: str, event: str) -> None: ...


class LocalHookRegistry:
    """Simple in-process hook registry.

    Hooks for an ``(action, event)`` pair run in registration order; each
    receives what the previous one returned.
    """

    def __init__(self) -> None:
        self._hooks: dict[tuple[str, str], list[Hook]] = {}

    def add_hook(self, hook: Hook, *, action: str, event: str) -> None:
        self._hooks.setdefault((action, event), []).append(hook)

    def hooks(self, action: str, event: str) -> list[Hook]:
        return list(self._hooks.get((action, event), []))

    async def run(self, action: str, event: str, evt: Any) -> Any:
        for hook in self.hooks(action, event):
            evt = await hook(evt)
        return evt
