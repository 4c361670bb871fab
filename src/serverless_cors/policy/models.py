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
"""CORS policy types: raw scope fragments, the validated policy, and results."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, StringConstraints
from pydantic.alias_generators import to_camel

from serverless_cors.kernel.exceptions import ConfigurationException

HEADER_NAME_PATTERN = r"^[A-Za-z0-9_-]+$"

HeaderName = Annotated[str, StringConstraints(pattern=HEADER_NAME_PATTERN)]
HeaderList = Annotated[list[HeaderName], Field(min_length=1)]
MaxAge = Annotated[StrictInt, Field(ge=0)] | Annotated[StrictFloat, Field(ge=0, allow_inf_nan=False)]


class CorsFragment(BaseModel):
    """Unvalidated ``cors`` settings from a single scope.

    Only the key set is checked here; values are typed by :class:`CorsPolicy`
    after all scopes have been merged.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    allow_origin: Any = None
    allow_headers: Any = None
    allow_credentials: Any = None
    expose_headers: Any = None
    max_age: Any = None

    def explicit_values(self) -> dict[str, Any]:
        """Fields the scope actually declared, keyed by their camelCase names."""
        return self.model_dump(by_alias=True, exclude_unset=True)


class CorsPolicy(BaseModel):
    """A merged and validated CORS policy for one endpoint."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        frozen=True,
    )

    allow_origin: Annotated[str, Field(min_length=1)]
    allow_headers: HeaderList | None = None
    allow_credentials: StrictBool | None = None
    expose_headers: HeaderList | None = None
    max_age: MaxAge | None = None


class Disabled:
    """No scope of the endpoint defines ``cors``."""

    _instance: Disabled | None = None

    def __new__(cls) -> Disabled:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "DISABLED"

    def __bool__(self) -> bool:
        return False


DISABLED = Disabled()


@dataclass(frozen=True)
class PolicyResult:
    """Outcome of resolving an endpoint's policy.

    Exactly one of three states: ``policy`` is set, ``error`` is set, or
    neither is set and CORS is disabled for the endpoint.
    """

    policy: CorsPolicy | None = None
    error: ConfigurationException | None = None

    @property
    def disabled(self) -> bool:
        return self.policy is None and self.error is None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> CorsPolicy | Disabled:
        """Return the policy (or DISABLED), raising the carried error if any."""
        if self.error is not None:
            raise self.error
        return self.policy if self.policy is not None else DISABLED
