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
"""Exception hierarchy for serverless-cors.

All plugin exceptions inherit from CorsPluginException so a host pipeline can
reject a hook with a single ``except`` clause, or catch a specific subclass
for targeted handling.

Categories:
- BusinessException: invalid CORS configuration in the project model
- InfrastructureException: API Gateway and other external service failures
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class CorsPluginException(Exception):
    """Base exception for all serverless-cors errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "CORS_CONFIGURATION_ERROR").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Business Exceptions
# =============================================================================


class BusinessException(CorsPluginException):
    """Problems with the project model handed to the plugin."""


class ConfigurationException(BusinessException):
    """A merged ``cors`` fragment failed schema validation."""


# =============================================================================
# Infrastructure Exceptions
# =============================================================================


class InfrastructureException(CorsPluginException):
    """Failures outside the plugin: network, credentials, remote APIs."""


class ExternalServiceException(InfrastructureException):
    """The API Gateway provisioning API returned an error."""


class GatewayResourceNotFoundException(ExternalServiceException):
    """The gateway reported that a resource or method does not exist."""
