"""Gateway adapters."""

from serverless_cors.gateway.adapters.boto3_adapter import Boto3ApiGatewayAdapter

__all__ = ["Boto3ApiGatewayAdapter"]
