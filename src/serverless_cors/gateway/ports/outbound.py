"""Outbound port: the slice of the API Gateway API the plugin drives."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ApiGatewayPort(Protocol):
    """Abstract API Gateway (REST API) provisioning interface.

    Implementations raise GatewayResourceNotFoundException when the target
    does not exist and ExternalServiceException for any other failure.
    """

    async def get_resources(self, rest_api_id: str) -> list[dict[str, Any]]: ...

    async def delete_method(self, rest_api_id: str, resource_id: str, http_method: str) -> None: ...

    async def put_method(self, rest_api_id: str, resource_id: str, http_method: str, **kwargs: Any) -> Any: ...

    async def put_integration(self, rest_api_id: str, resource_id: str, http_method: str, **kwargs: Any) -> Any: ...

    async def put_method_response(
        self, rest_api_id: str, resource_id: str, http_method: str, status_code: str, **kwargs: Any
    ) -> Any: ...

    async def put_integration_response(
        self, rest_api_id: str, resource_id: str, http_method: str, status_code: str, **kwargs: Any
    ) -> Any: ...

    async def create_deployment(self, rest_api_id: str, stage_name: str, **kwargs: Any) -> Any: ...
