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
"""Typed configuration properties for the plugin (cors.*)."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

from serverless_cors.core.config import config_properties


@config_properties(prefix="cors.preflight")
class PreflightProperties(BaseModel):
    """How synthesized OPTIONS endpoints reach API Gateway."""

    mode: Literal["model", "gateway"] = "model"


@config_properties(prefix="cors.gateway")
class GatewayProperties(BaseModel):
    """Connection details used when the plugin drives API Gateway itself."""

    rest_api_id: str | None = None
    region: str | None = None
    description: str = "Serverless deployment"


@config_properties(prefix="cors.logging")
class LoggingProperties(BaseModel):
    format: Literal["console", "json"] = "console"
    level: dict[str, str] = {"root": "INFO"}
