"""serverless-cors validation: Pydantic integration."""

from serverless_cors.validation.helpers import format_errors, validate_model

__all__ = [
    "format_errors",
    "validate_model",
]
