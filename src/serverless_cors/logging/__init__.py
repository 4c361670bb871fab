"""serverless-cors logging: port and structlog adapter."""

from serverless_cors.logging.port import LoggingPort
from serverless_cors.logging.structlog_adapter import StructlogAdapter

__all__ = ["LoggingPort", "StructlogAdapter"]
