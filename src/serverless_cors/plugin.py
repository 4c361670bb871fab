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
"""CorsPlugin: wires policy resolution and preflight synthesis into host hooks."""

from __future__ import annotations

from pathlib import Path

from serverless_cors.config.properties import GatewayProperties, PreflightProperties
from serverless_cors.core.config import Config
from serverless_cors.gateway.adapters.boto3_adapter import Boto3ApiGatewayAdapter
from serverless_cors.gateway.ports.outbound import ApiGatewayPort
from serverless_cors.hooks import (
    ENDPOINT_BUILD_API_GATEWAY,
    ENDPOINT_DEPLOY,
    POST,
    PRE,
    DeployEvent,
    EndpointBuildEvent,
    HookRegistry,
)
from serverless_cors.kernel.exceptions import ConfigurationException
from serverless_cors.logging.port import LoggingPort
from serverless_cors.logging.structlog_adapter import StructlogAdapter
from serverless_cors.model.endpoint import normalize_path
from serverless_cors.policy.resolver import add_cors_headers
from serverless_cors.preflight.deployer import PreflightDeployer
from serverless_cors.preflight.synthesizer import (
    DeploymentContext,
    PreflightEndpoint,
    iter_preflights,
)


class CorsPlugin:
    """Adds CORS headers to endpoints and OPTIONS preflight endpoints to paths.

    In ``model`` mode preflights are injected into the project before the
    host deploys endpoints. In ``gateway`` mode the plugin creates them
    through the API Gateway API after the host's deployment.
    """

    def __init__(
        self,
        config: Config | None = None,
        gateway: ApiGatewayPort | None = None,
        logging_port: LoggingPort | None = None,
    ) -> None:
        self._config = config if config is not None else Config.from_file()
        self._preflight_props = self._config.bind(PreflightProperties)
        self._gateway_props = self._config.bind(GatewayProperties)
        self._gateway = gateway
        self._logging = logging_port if logging_port is not None else StructlogAdapter()
        self._logger = self._logging.get_logger("serverless_cors.plugin")

    @classmethod
    def from_config_file(cls, path: str | Path, active_profiles: list[str] | None = None) -> CorsPlugin:
        """Load settings from *path*, configure logging, and build the plugin."""
        config = Config.from_file(path, active_profiles=active_profiles)
        logging_port = StructlogAdapter()
        logging_port.configure(config)
        return cls(config=config, logging_port=logging_port)

    @staticmethod
    def get_name() -> str:
        return "serverless_cors.CorsPlugin"

    @property
    def mode(self) -> str:
        return self._preflight_props.mode

    def register_hooks(self, registry: HookRegistry) -> None:
        registry.add_hook(self.add_cors_headers, action=ENDPOINT_BUILD_API_GATEWAY, event=PRE)
        registry.add_hook(
            self.add_preflight_requests,
            action=ENDPOINT_DEPLOY,
            event=POST if self.mode == "gateway" else PRE,
        )

    async def add_cors_headers(self, evt: EndpointBuildEvent) -> EndpointBuildEvent:
        """Inject CORS response headers into ``evt.endpoint``.

        Raises:
            ConfigurationException: The endpoint's merged policy is invalid.
        """
        result = add_cors_headers(evt.endpoint)
        result.unwrap()
        if result.policy is not None:
            self._logger.info(
                "cors_headers_added",
                path=evt.endpoint.path,
                method=evt.endpoint.method,
                stage=evt.stage,
            )
        return evt

    async def add_preflight_requests(self, evt: DeployEvent) -> DeployEvent:
        """Create OPTIONS endpoints for every CORS-enabled path.

        Only runs when the host was asked to deploy all endpoints.
        """
        if evt.all is not True:
            return evt

        context = DeploymentContext(
            endpoints=evt.project.all_endpoints(),
            all=True,
            stage=evt.stage,
            region=evt.region,
        )

        if self.mode == "gateway":
            await self._deploy_preflights(evt, context)
        else:
            self._inject_preflights(context)
        return evt

    def _inject_preflights(self, context: DeploymentContext) -> list[PreflightEndpoint]:
        injected: list[PreflightEndpoint] = []
        for preflight in iter_preflights(context):
            if preflight.function is None:
                self._logger.warning("preflight_without_function", path=preflight.path)
                continue
            preflight.function.set_endpoint(preflight)
            injected.append(preflight)
            self._logger.info(
                "preflight_injected",
                path=preflight.path,
                allow_methods=preflight.allow_methods,
                stage=context.stage,
            )
        return injected

    async def _deploy_preflights(self, evt: DeployEvent, context: DeploymentContext) -> list[PreflightEndpoint]:
        rest_api_id = evt.rest_api_id or self._gateway_props.rest_api_id
        if not rest_api_id:
            raise ConfigurationException(
                "Preflight mode 'gateway' requires a REST API id (cors.gateway.rest_api_id)",
                code="CORS_CONFIGURATION_ERROR",
                context={"stage": evt.stage},
            )

        preflights = list(iter_preflights(context))
        if evt.deployed is not None:
            deployed_paths = {normalize_path(endpoint.path) for endpoint in evt.deployed}
            preflights = [preflight for preflight in preflights if preflight.path in deployed_paths]

        deployer = PreflightDeployer(self._gateway_for(evt), rest_api_id)
        return await deployer.deploy(
            preflights,
            stage=evt.stage,
            description=evt.description or self._gateway_props.description,
        )

    def _gateway_for(self, evt: DeployEvent) -> ApiGatewayPort:
        if self._gateway is None:
            self._gateway = Boto3ApiGatewayAdapter(region=evt.region or self._gateway_props.region)
        return self._gateway
