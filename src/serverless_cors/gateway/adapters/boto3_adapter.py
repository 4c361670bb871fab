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
"""boto3-based API Gateway adapter."""

from __future__ import annotations

import asyncio
import functools
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from serverless_cors.kernel.exceptions import (
    ExternalServiceException,
    GatewayResourceNotFoundException,
)

NOT_FOUND_CODES = frozenset({"NotFoundException"})


class Boto3ApiGatewayAdapter:
    """API Gateway adapter backed by a boto3 ``apigateway`` client.

    boto3 is blocking, so every call runs in the loop's default executor and
    is awaited before the next one starts.
    """

    def __init__(self, region: str | None = None, client: Any = None) -> None:
        self._client = client if client is not None else boto3.client("apigateway", region_name=region)

    @property
    def client(self) -> Any:
        return self._client

    async def _call(self, operation: str, **params: Any) -> Any:
        method = getattr(self._client, operation)
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(None, functools.partial(method, **params))
        except ClientError as exc:
            error = exc.response.get("Error", {})
            code = error.get("Code", "ClientError")
            context = {"operation": operation, "aws_code": code}
            if code in NOT_FOUND_CODES:
                raise GatewayResourceNotFoundException(
                    error.get("Message", str(exc)), code="GATEWAY_NOT_FOUND", context=context
                ) from exc
            raise ExternalServiceException(
                f"API Gateway {operation} failed: {error.get('Message', exc)}",
                code="GATEWAY_ERROR",
                context=context,
            ) from exc
        except BotoCoreError as exc:
            raise ExternalServiceException(
                f"API Gateway {operation} failed: {exc}",
                code="GATEWAY_ERROR",
                context={"operation": operation},
            ) from exc

    async def get_resources(self, rest_api_id: str) -> list[dict[str, Any]]:
        items: list[dict[str, Any]] = []
        position: str | None = None
        while True:
            params: dict[str, Any] = {"restApiId": rest_api_id, "limit": 500}
            if position:
                params["position"] = position
            page = await self._call("get_resources", **params)
            items.extend(page.get("items", []))
            position = page.get("position")
            if not position:
                return items

    async def delete_method(self, rest_api_id: str, resource_id: str, http_method: str) -> None:
        await self._call("delete_method", restApiId=rest_api_id, resourceId=resource_id, httpMethod=http_method)

    async def put_method(self, rest_api_id: str, resource_id: str, http_method: str, **kwargs: Any) -> Any:
        return await self._call(
            "put_method", restApiId=rest_api_id, resourceId=resource_id, httpMethod=http_method, **kwargs
        )

    async def put_integration(self, rest_api_id: str, resource_id: str, http_method: str, **kwargs: Any) -> Any:
        return await self._call(
            "put_integration", restApiId=rest_api_id, resourceId=resource_id, httpMethod=http_method, **kwargs
        )

    async def put_method_response(
        self, rest_api_id: str, resource_id: str, http_method: str, status_code: str, **kwargs: Any
    ) -> Any:
        return await self._call(
            "put_method_response",
            restApiId=rest_api_id,
            resourceId=resource_id,
            httpMethod=http_method,
            statusCode=status_code,
            **kwargs,
        )

    async def put_integration_response(
        self, rest_api_id: str, resource_id: str, http_method: str, status_code: str, **kwargs: Any
    ) -> Any:
        return await self._call(
            "put_integration_response",
            restApiId=rest_api_id,
            resourceId=resource_id,
            httpMethod=http_method,
            statusCode=status_code,
            **kwargs,
        )

    async def create_deployment(self, rest_api_id: str, stage_name: str, **kwargs: Any) -> Any:
        return await self._call("create_deployment", restApiId=rest_api_id, stageName=stage_name, **kwargs)
