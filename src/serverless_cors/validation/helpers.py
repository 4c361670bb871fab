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
"""Pydantic integration helpers for validating project configuration."""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from serverless_cors.kernel.exceptions import ConfigurationException

T = TypeVar("T", bound=BaseModel)


def format_errors(errors: list[dict[str, Any]]) -> str:
    """Render pydantic error dicts as ``loc: msg; loc: msg``."""
    return "; ".join(f"{'.'.join(str(loc) for loc in e['loc']) or '<root>'}: {e['msg']}" for e in errors)


def validate_model(model: type[T], data: Any) -> T:
    """Validate data against a Pydantic model.

    Raises:
        ConfigurationException: If validation fails, with structured error details.
    """
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        errors = exc.errors(include_url=False)
        raise ConfigurationException(
            f"Invalid CORS configuration: {format_errors(errors)}",
            code="CORS_CONFIGURATION_ERROR",
            context={"errors": errors, "model": model.__name__},
        ) from exc
