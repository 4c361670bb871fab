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
"""Derive one synthetic OPTIONS endpoint per path from the project's endpoints."""

from __future__ import annotations

import re
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

import structlog

from serverless_cors.model.endpoint import Endpoint, Function, ResponseDefinition, normalize_path
from serverless_cors.policy.models import CorsPolicy
from serverless_cors.policy.resolver import (
    ALLOW_CREDENTIALS,
    ALLOW_HEADERS,
    ALLOW_METHODS,
    ALLOW_ORIGIN,
    EXPOSE_HEADERS,
    MAX_AGE,
    header_key,
    quote,
    resolve_policy,
)

logger = structlog.get_logger("serverless_cors.preflight")

PATH_PARAM_RE = re.compile(r"{([^}]+)}")

MOCK_REQUEST_TEMPLATES = {"application/json": '{"statusCode": 200}'}


@dataclass(frozen=True)
class DeploymentContext:
    """What one deployment run hands the synthesizer."""

    endpoints: Sequence[Endpoint]
    all: bool = False
    stage: str | None = None
    region: str | None = None


@dataclass(eq=False, repr=False)
class PreflightEndpoint(Endpoint):
    """Mock OPTIONS endpoint answering browser preflight requests for a path."""

    method: str = "OPTIONS"
    type: str = "MOCK"
    policy: CorsPolicy | None = None
    allow_methods: list[str] = field(default_factory=list)

    @property
    def response_headers(self) -> dict[str, str]:
        return self.responses["default"].response_parameters


def group_by_path(endpoints: Sequence[Endpoint]) -> dict[str, list[Endpoint]]:
    """Endpoints keyed by path without leading slash, in first-seen order."""
    groups: dict[str, list[Endpoint]] = {}
    for endpoint in endpoints:
        groups.setdefault(normalize_path(endpoint.path), []).append(endpoint)
    return groups


def preflight_headers(policy: CorsPolicy, allow_methods: Sequence[str]) -> dict[str, str]:
    headers = {
        header_key(ALLOW_METHODS): quote(list(allow_methods)),
        header_key(ALLOW_ORIGIN): quote(policy.allow_origin),
    }
    if policy.allow_headers is not None:
        headers[header_key(ALLOW_HEADERS)] = quote(policy.allow_headers)
    if policy.allow_credentials is not None:
        headers[header_key(ALLOW_CREDENTIALS)] = quote(policy.allow_credentials)
    if policy.expose_headers is not None:
        headers[header_key(EXPOSE_HEADERS)] = quote(policy.expose_headers)
    if policy.max_age is not None:
        headers[header_key(MAX_AGE)] = quote(policy.max_age)
    return headers


def build_preflight(
    path: str,
    policy: CorsPolicy,
    allow_methods: Sequence[str],
    function: Function | None = None,
) -> PreflightEndpoint:
    preflight = PreflightEndpoint(
        path=path,
        function=function,
        request_templates=dict(MOCK_REQUEST_TEMPLATES),
        policy=policy,
        allow_methods=list(allow_methods),
    )

    for name in PATH_PARAM_RE.findall(path):
        preflight.request_parameters[f"integration.request.path.{name}"] = f"method.request.path.{name}"

    # A mock integration never takes the error branch.
    preflight.responses.pop("400", None)
    preflight.responses["default"] = ResponseDefinition(
        status_code="200",
        response_parameters=preflight_headers(policy, allow_methods),
    )
    return preflight


def iter_preflights(context: DeploymentContext) -> Iterator[PreflightEndpoint]:
    """Yield preflight endpoints path by path.

    The first CORS-enabled endpoint of a path supplies the policy; later
    ones only contribute their method. Existing OPTIONS endpoints are
    placeholders and take no part.

    Raises:
        ConfigurationException: An enabled endpoint's policy is invalid.
            Preflights for earlier paths have already been yielded.
    """
    if context.all is not True:
        return

    for path, members in group_by_path(context.endpoints).items():
        policy: CorsPolicy | None = None
        owner: Function | None = None
        allow_methods: list[str] = []

        for endpoint in members:
            if endpoint.method == "OPTIONS":
                continue

            result = resolve_policy(endpoint)
            if result.disabled:
                continue
            if result.error is not None:
                raise result.error

            # TODO: merge or reject differing policies on one path instead of
            # keeping the first; hosts may rely on first-wins today.
            if policy is None:
                policy = result.policy
                owner = endpoint.function
            if endpoint.method not in allow_methods:
                allow_methods.append(endpoint.method)

        if policy is None:
            logger.debug("preflight_skipped", path=path, reason="cors_not_enabled")
            continue

        logger.debug("preflight_synthesized", path=path, allow_methods=allow_methods)
        yield build_preflight(path, policy, allow_methods, owner)


def synthesize_preflights(context: DeploymentContext) -> list[PreflightEndpoint]:
    """All preflight endpoints for *context*; empty unless ``context.all``."""
    return list(iter_preflights(context))
