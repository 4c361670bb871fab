"""Gateway ports."""

from serverless_cors.gateway.ports.outbound import ApiGatewayPort

__all__ = ["ApiGatewayPort"]
