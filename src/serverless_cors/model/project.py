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
"""Project and module scopes, plus a loader from plain mappings."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from serverless_cors.model.endpoint import (
    Endpoint,
    Function,
    ResponseDefinition,
    Scope,
    default_responses,
)


@dataclass(eq=False)
class Module(Scope):
    """A group of functions sharing configuration (a "component")."""

    functions: list[Function] = field(default_factory=list, repr=False)

    def add_function(self, function: Function) -> Function:
        function.parent = self
        self.functions.append(function)
        return function


@dataclass(eq=False)
class Project(Scope):
    """Root scope. Functions hang off modules or directly off the project."""

    modules: list[Module] = field(default_factory=list, repr=False)
    functions: list[Function] = field(default_factory=list, repr=False)

    def add_module(self, module: Module) -> Module:
        module.parent = self
        self.modules.append(module)
        return module

    def add_function(self, function: Function) -> Function:
        function.parent = self
        self.functions.append(function)
        return function

    def iter_functions(self) -> Iterator[Function]:
        for module in self.modules:
            yield from module.functions
        yield from self.functions

    def all_endpoints(self) -> list[Endpoint]:
        """Every endpoint in declaration order."""
        return [endpoint for function in self.iter_functions() for endpoint in function.endpoints]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Project:
        """Build a project from a mapping such as a parsed ``s-project.yaml``.

        Shape::

            name: demo
            custom: {cors: {allowOrigin: "*"}}
            modules:
              - name: users
                functions:
                  - name: list
                    endpoints:
                      - {path: users, method: GET}
            functions: [...]
        """
        project = cls(name=data.get("name", "project"), custom=dict(data.get("custom") or {}))
        for module_data in data.get("modules") or []:
            module = project.add_module(
                Module(name=module_data["name"], custom=dict(module_data.get("custom") or {}))
            )
            for function_data in module_data.get("functions") or []:
                module.add_function(_function_from_dict(function_data))
        for function_data in data.get("functions") or []:
            project.add_function(_function_from_dict(function_data))
        return project


def _function_from_dict(data: Mapping[str, Any]) -> Function:
    function = Function(name=data["name"], custom=dict(data.get("custom") or {}))
    for endpoint_data in data.get("endpoints") or []:
        function.set_endpoint(_endpoint_from_dict(endpoint_data))
    return function


def _endpoint_from_dict(data: Mapping[str, Any]) -> Endpoint:
    responses = default_responses()
    for name, response in (data.get("responses") or {}).items():
        responses[str(name)] = ResponseDefinition(
            status_code=str(response.get("statusCode", "200")),
            selection_pattern=response.get("selectionPattern"),
            response_parameters=dict(response.get("responseParameters") or {}),
            response_models=dict(response.get("responseModels") or {}),
            response_templates=dict(response.get("responseTemplates") or {"application/json": ""}),
        )
    return Endpoint(
        path=data["path"],
        method=data["method"],
        type=data.get("type", "AWS"),
        authorization_type=data.get("authorizationType", "none"),
        request_parameters=dict(data.get("requestParameters") or {}),
        request_templates=dict(data.get("requestTemplates") or {}),
        responses=responses,
    )
