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
"""Reconcile synthesized preflight endpoints against a live REST API.

Per path, strictly in order: delete OPTIONS, put method, put integration,
put method response, put integration response. One stage deployment follows
the whole batch.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import structlog

from serverless_cors.gateway.ports.outbound import ApiGatewayPort
from serverless_cors.kernel.exceptions import GatewayResourceNotFoundException
from serverless_cors.policy.resolver import ALLOW_METHODS, header_key
from serverless_cors.preflight.synthesizer import PreflightEndpoint

logger = structlog.get_logger("serverless_cors.deployer")

OPTIONS = "OPTIONS"


class PreflightDeployer:
    """Creates or replaces OPTIONS methods through an ApiGatewayPort."""

    def __init__(self, gateway: ApiGatewayPort, rest_api_id: str) -> None:
        self._gateway = gateway
        self._rest_api_id = rest_api_id

    async def deploy(
        self,
        preflights: Sequence[PreflightEndpoint],
        stage: str,
        description: str = "Serverless deployment",
    ) -> list[PreflightEndpoint]:
        """Reconcile *preflights* and deploy *stage*; returns the ones applied.

        Paths without a gateway resource are skipped. Any gateway error other
        than not-found on delete aborts the run.
        """
        if not preflights:
            return []

        resources = await self._gateway.get_resources(self._rest_api_id)
        by_path = {resource.get("path"): resource for resource in resources}

        applied: list[PreflightEndpoint] = []
        for preflight in preflights:
            resource = by_path.get("/" + preflight.path.lstrip("/"))
            if resource is None:
                logger.warning("preflight_resource_missing", path=preflight.path, rest_api_id=self._rest_api_id)
                continue
            await self._create_endpoint(resource["id"], preflight)
            applied.append(preflight)

        if applied:
            await self._gateway.create_deployment(
                self._rest_api_id,
                stage,
                description=description,
                stageDescription=stage,
                variables={"functionAlias": stage},
            )
            logger.info("preflight_stage_deployed", stage=stage, paths=[p.path for p in applied])
        return applied

    async def _create_endpoint(self, resource_id: str, preflight: PreflightEndpoint) -> None:
        await self._remove_method(resource_id)

        await self._gateway.put_method(
            self._rest_api_id,
            resource_id,
            OPTIONS,
            authorizationType="NONE",
            requestParameters=self._method_request_parameters(preflight),
        )
        await self._gateway.put_integration(
            self._rest_api_id,
            resource_id,
            OPTIONS,
            type=preflight.type,
            requestTemplates=dict(preflight.request_templates),
            requestParameters=dict(preflight.request_parameters),
        )

        response = preflight.responses["default"]
        await self._gateway.put_method_response(
            self._rest_api_id,
            resource_id,
            OPTIONS,
            response.status_code,
            responseParameters=self._declared_headers(response.response_parameters),
            responseModels=dict(response.response_models),
        )
        await self._gateway.put_integration_response(
            self._rest_api_id,
            resource_id,
            OPTIONS,
            response.status_code,
            responseParameters=dict(response.response_parameters),
            responseTemplates=dict(response.response_templates),
        )
        logger.info("preflight_created", path=preflight.path, allow_methods=preflight.allow_methods)

    async def _remove_method(self, resource_id: str) -> None:
        try:
            await self._gateway.delete_method(self._rest_api_id, resource_id, OPTIONS)
        except GatewayResourceNotFoundException:
            logger.debug("preflight_method_absent", resource_id=resource_id)

    @staticmethod
    def _declared_headers(values: dict[str, Any]) -> dict[str, bool]:
        """Method responses declare which headers exist, not their values."""
        allow_methods = header_key(ALLOW_METHODS)
        return {name: name == allow_methods for name in values}

    @staticmethod
    def _method_request_parameters(preflight: PreflightEndpoint) -> dict[str, bool]:
        return {source: True for source in preflight.request_parameters.values()}
