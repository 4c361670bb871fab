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
"""Resolve an endpoint's CORS policy and inject it into the endpoint's responses."""

from __future__ import annotations

from typing import Any

import structlog

from serverless_cors.kernel.exceptions import ConfigurationException
from serverless_cors.model.endpoint import Endpoint, Scope
from serverless_cors.policy.models import CorsFragment, CorsPolicy, PolicyResult
from serverless_cors.validation.helpers import format_errors, validate_model

logger = structlog.get_logger("serverless_cors.policy")

RESPONSE_HEADER_PREFIX = "method.response.header."

ALLOW_ORIGIN = "Access-Control-Allow-Origin"
ALLOW_METHODS = "Access-Control-Allow-Methods"
ALLOW_HEADERS = "Access-Control-Allow-Headers"
ALLOW_CREDENTIALS = "Access-Control-Allow-Credentials"
EXPOSE_HEADERS = "Access-Control-Expose-Headers"
MAX_AGE = "Access-Control-Max-Age"


def header_key(name: str) -> str:
    """API Gateway mapping key for a method response header."""
    return RESPONSE_HEADER_PREFIX + name


def quote(value: Any) -> str:
    """Render *value* as an API Gateway literal: ``'a,b'``, ``'true'``, ``'600'``."""
    if isinstance(value, bool):
        rendered = "true" if value else "false"
    elif isinstance(value, (list, tuple)):
        rendered = ",".join(str(item) for item in value)
    elif isinstance(value, float) and value.is_integer():
        rendered = str(int(value))
    else:
        rendered = str(value)
    return f"'{rendered}'"


def is_cors_enabled(endpoint: Endpoint) -> bool:
    return any(scope.defines_cors for scope in endpoint.scopes())


def _parse_fragment(scope: Scope) -> CorsFragment:
    raw = scope.cors
    if raw is None:
        return CorsFragment()
    try:
        return validate_model(CorsFragment, raw)
    except ConfigurationException as exc:
        errors = exc.context.get("errors", [])
        raise ConfigurationException(
            f"Invalid CORS configuration in '{scope.name}': {format_errors(errors)}",
            code=exc.code,
            context={**exc.context, "scope": scope.name},
        ) from exc


def merge_fragments(fragments: list[CorsFragment]) -> dict[str, Any]:
    """Shallow merge, later (more specific) fragments overriding earlier ones."""
    merged: dict[str, Any] = {}
    for fragment in fragments:
        merged.update(fragment.explicit_values())
    return merged


def resolve_policy(endpoint: Endpoint) -> PolicyResult:
    """Resolve the effective CORS policy of *endpoint*.

    Scopes are merged project first, function last. Returns a disabled
    result when no scope defines ``cors`` and an error result when the
    merged settings do not form a valid policy.
    """
    scopes = endpoint.scopes()
    if not any(scope.defines_cors for scope in scopes):
        return PolicyResult()

    try:
        fragments = [_parse_fragment(scope) for scope in scopes if scope.defines_cors]
        policy = validate_model(CorsPolicy, merge_fragments(fragments))
    except ConfigurationException as exc:
        exc.context.setdefault("endpoint", f"{endpoint.method} {endpoint.path}")
        return PolicyResult(error=exc)

    return PolicyResult(policy=policy)


def apply_cors_headers(endpoint: Endpoint, policy: CorsPolicy) -> None:
    """Add the policy's response headers to every response of *endpoint*.

    Existing response parameters are kept. Credentials are only mirrored on
    GET responses: those are the requests browsers send without a preflight.
    """
    if endpoint.method == "OPTIONS":
        return

    for response in endpoint.iter_responses():
        params = response.response_parameters
        params[header_key(ALLOW_ORIGIN)] = quote(policy.allow_origin)

        if policy.expose_headers is not None:
            params[header_key(EXPOSE_HEADERS)] = quote(policy.expose_headers)

        if endpoint.method == "GET" and policy.allow_credentials is not None:
            params[header_key(ALLOW_CREDENTIALS)] = quote(policy.allow_credentials)


def add_cors_headers(endpoint: Endpoint) -> PolicyResult:
    """Resolve *endpoint*'s policy and, if valid, inject its headers."""
    if endpoint.method == "OPTIONS":
        return PolicyResult()

    result = resolve_policy(endpoint)
    if result.policy is not None:
        apply_cors_headers(endpoint, result.policy)
        logger.debug("cors_headers_added", path=endpoint.path, method=endpoint.method)
    elif result.error is not None:
        logger.warning("cors_policy_invalid", path=endpoint.path, method=endpoint.method, error=str(result.error))
    return result
