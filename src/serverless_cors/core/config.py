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
"""Plugin settings from YAML/TOML files, env vars, and typed property binding."""

from __future__ import annotations

import importlib.resources
import os
import re
import tomllib
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

import yaml  # type: ignore[import-untyped]
from pydantic import BaseModel

from serverless_cors.validation.helpers import validate_model

M = TypeVar("M", bound=BaseModel)

_PLACEHOLDER_RE = re.compile(r"\$\{([^}]+)\}")
_MAX_PLACEHOLDER_DEPTH = 10

_PREFIX_ATTR = "__cors_config_prefix__"

DEFAULTS_RESOURCE = "serverless-cors-defaults.yaml"


def config_properties(prefix: str) -> Callable[[type[M]], type[M]]:
    """Bind a pydantic settings model to the config section at *prefix*.

    Usage:
        @config_properties(prefix="cors.gateway")
        class GatewayProperties(BaseModel):
            region: str | None = None
    """

    def decorator(cls: type[M]) -> type[M]:
        setattr(cls, _PREFIX_ATTR, prefix)
        return cls

    return decorator


def _read(path: Path) -> dict[str, Any]:
    if path.suffix == ".toml":
        with open(path, "rb") as f:
            return tomllib.load(f)
    with open(path) as f:
        return yaml.safe_load(f) or {}


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class Config:
    """Nested settings mapping read with dot-notation keys.

    An environment variable named after the key (``cors.preflight.mode`` ->
    ``CORS_PREFLIGHT_MODE``) beats the file, which beats packaged defaults.
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = data or {}
        self.loaded_sources: list[str] = []

    @classmethod
    def from_file(
        cls,
        path: str | Path | None = None,
        active_profiles: list[str] | None = None,
        load_defaults: bool = True,
    ) -> Config:
        """Load packaged defaults, then *path*, then ``<stem>-<profile>`` overlays.

        A missing *path* is not an error: the plugin runs on its defaults.
        """
        layers: list[tuple[str, Path | None]] = []
        if load_defaults:
            layers.append((f"{DEFAULTS_RESOURCE} (defaults)", None))
        if path is not None and Path(path).is_file():
            path = Path(path)
            layers.append((str(path), path))
            for profile in active_profiles or []:
                overlay = path.with_name(f"{path.stem}-{profile}{path.suffix}")
                if overlay.is_file():
                    layers.append((f"{overlay} (profile: {profile})", overlay))

        data: dict[str, Any] = {}
        for _, source in layers:
            data = _merge(data, cls._load_defaults() if source is None else _read(source))

        config = cls(data)
        config.loaded_sources = [label for label, _ in layers]
        return config

    @staticmethod
    def _load_defaults() -> dict[str, Any]:
        resource = importlib.resources.files("serverless_cors.resources").joinpath(DEFAULTS_RESOURCE)
        return yaml.safe_load(resource.read_text(encoding="utf-8")) or {}

    @staticmethod
    def env_key(key: str) -> str:
        return key.upper().replace(".", "_").replace("-", "_")

    def _lookup(self, key: str) -> Any:
        node: Any = self._data
        for part in key.split("."):
            if not isinstance(node, dict):
                return None
            node = node.get(part)
        return node

    def get(self, key: str, default: Any = None) -> Any:
        """Value at a dot-notation *key*, env var first.

        Strings may hold ``${NAME}`` or ``${NAME:fallback}`` placeholders.
        ``NAME`` is looked up as an env var, then as a config key.
        """
        env_val = os.environ.get(self.env_key(key))
        if env_val is not None:
            return env_val

        value = self._lookup(key)
        if value is None:
            return default
        if isinstance(value, str):
            return self._resolve_placeholders(value)
        return value

    def _resolve_placeholders(self, value: str, depth: int = 0) -> str:
        if "${" not in value:
            return value
        if depth > _MAX_PLACEHOLDER_DEPTH:
            raise ValueError(f"Placeholders in '{value}' nest too deeply; check for circular references")

        def substitute(match: re.Match[str]) -> str:
            name, sep, fallback = match.group(1).partition(":")
            found = os.environ.get(name)
            if found is None:
                ref = self._lookup(name)
                found = None if ref is None else self._resolve_placeholders(str(ref), depth + 1)
            if found is not None:
                return found
            if sep:
                return fallback
            raise ValueError(f"Cannot resolve placeholder '${{{match.group(1)}}}': not found in environment or config")

        return _PLACEHOLDER_RE.sub(substitute, value)

    def get_section(self, prefix: str) -> dict[str, Any]:
        """Mapping stored under *prefix*, or an empty dict."""
        section = self._lookup(prefix)
        return section if isinstance(section, dict) else {}

    def bind(self, model: type[M]) -> M:
        """Validate the section named by *model*'s ``@config_properties`` prefix.

        Scalar leaves under the prefix honour env var overrides, so
        ``CORS_PREFLIGHT_MODE=gateway`` reaches ``PreflightProperties.mode``.

        Raises:
            ValueError: *model* carries no prefix.
            ConfigurationException: The section does not fit *model*.
        """
        prefix = getattr(model, _PREFIX_ATTR, None)
        if prefix is None:
            raise ValueError(f"{model.__name__} is not decorated with @config_properties")
        return validate_model(model, self._overridden(prefix, self.get_section(prefix)))

    def _overridden(self, prefix: str, section: dict[str, Any]) -> dict[str, Any]:
        return {
            key: self._overridden(f"{prefix}.{key}", value)
            if isinstance(value, dict)
            else self.get(f"{prefix}.{key}", value)
            for key, value in section.items()
        }
