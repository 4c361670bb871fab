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
"""In-memory project model: scopes, functions, endpoints and their responses.

The host framework owns these objects. The plugin reads scope configuration
and mutates endpoint response definitions in place; it never persists them.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

CORS_KEY = "cors"

# Generic response template the framework stamps onto every new endpoint.
BAD_REQUEST_PATTERN = r"^\[BadRequest\].*"


@dataclass
class ResponseDefinition:
    """One integration/method response pair of an endpoint."""

    status_code: str = "200"
    selection_pattern: str | None = None
    response_parameters: dict[str, Any] = field(default_factory=dict)
    response_models: dict[str, str] = field(default_factory=dict)
    response_templates: dict[str, str] = field(default_factory=lambda: {"application/json": ""})


def default_responses() -> dict[str, ResponseDefinition]:
    return {
        "400": ResponseDefinition(status_code="400", selection_pattern=BAD_REQUEST_PATTERN),
        "default": ResponseDefinition(status_code="200"),
    }


@dataclass(eq=False)
class Scope:
    """A configuration owner: project, module or function.

    ``custom`` holds arbitrary user settings; the plugin only looks at
    ``custom["cors"]``. ``parent`` points at the next broader scope.
    """

    name: str
    custom: dict[str, Any] = field(default_factory=dict)
    parent: Scope | None = field(default=None, repr=False)

    @property
    def defines_cors(self) -> bool:
        return CORS_KEY in self.custom

    @property
    def cors(self) -> Any:
        return self.custom.get(CORS_KEY)

    def chain(self) -> list[Scope]:
        """This scope and its ancestors, broadest first."""
        scopes: list[Scope] = []
        current: Scope | None = self
        while current is not None:
            scopes.append(current)
            current = current.parent
        scopes.reverse()
        return scopes


@dataclass(eq=False)
class Function(Scope):
    """A deployable function; owns the endpoints that route to it."""

    endpoints: list[Endpoint] = field(default_factory=list)

    def set_endpoint(self, endpoint: Endpoint) -> None:
        """Attach *endpoint*, replacing one with the same path and method."""
        endpoint.function = self
        for index, existing in enumerate(self.endpoints):
            if existing.key == endpoint.key:
                self.endpoints[index] = endpoint
                return
        self.endpoints.append(endpoint)


@dataclass(eq=False)
class Endpoint:
    """An API Gateway method on a path, backed by a function."""

    path: str
    method: str
    function: Function | None = field(default=None, repr=False)
    type: str = "AWS"
    authorization_type: str = "none"
    request_parameters: dict[str, str] = field(default_factory=dict)
    request_templates: dict[str, str] = field(default_factory=dict)
    responses: dict[str, ResponseDefinition] = field(default_factory=default_responses)

    def __post_init__(self) -> None:
        self.method = self.method.upper()

    @property
    def key(self) -> tuple[str, str]:
        return normalize_path(self.path), self.method

    def scopes(self) -> list[Scope]:
        """Owning scopes, broadest (project) first and function last."""
        return self.function.chain() if self.function is not None else []

    def iter_responses(self) -> Iterator[ResponseDefinition]:
        yield from self.responses.values()

    def __repr__(self) -> str:
        return f"Endpoint({self.method} /{normalize_path(self.path)})"


def normalize_path(path: str) -> str:
    """Strip leading slashes; paths are otherwise compared verbatim."""
    return path.lstrip("/")
