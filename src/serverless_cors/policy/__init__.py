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
"""serverless-cors policy: scope merging, validation and header injection."""

from serverless_cors.policy.models import (
    DISABLED,
    CorsFragment,
    CorsPolicy,
    Disabled,
    PolicyResult,
)
from serverless_cors.policy.resolver import (
    add_cors_headers,
    apply_cors_headers,
    header_key,
    is_cors_enabled,
    quote,
    resolve_policy,
)

__all__ = [
    "DISABLED",
    "CorsFragment",
    "CorsPolicy",
    "Disabled",
    "PolicyResult",
    "add_cors_headers",
    "apply_cors_headers",
    "header_key",
    "is_cors_enabled",
    "quote",
    "resolve_policy",
]
