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
"""serverless-cors: CORS headers and preflight endpoints for API Gateway deployments."""

from serverless_cors.hooks import DeployEvent, EndpointBuildEvent, HookRegistry, LocalHookRegistry
from serverless_cors.kernel.exceptions import ConfigurationException, CorsPluginException
from serverless_cors.plugin import CorsPlugin
from serverless_cors.policy import CorsPolicy, PolicyResult, add_cors_headers, resolve_policy
from serverless_cors.preflight import DeploymentContext, PreflightEndpoint, synthesize_preflights

__version__ = "0.4.0"

__all__ = [
    "ConfigurationException",
    "CorsPlugin",
    "CorsPluginException",
    "CorsPolicy",
    "DeployEvent",
    "DeploymentContext",
    "EndpointBuildEvent",
    "HookRegistry",
    "LocalHookRegistry",
    "PolicyResult",
    "PreflightEndpoint",
    "__version__",
    "add_cors_headers",
    "resolve_policy",
    "synthesize_preflights",
]
