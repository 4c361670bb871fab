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
"""Tests for Config: defaults, YAML/TOML files, env overrides and binding."""

from dataclasses import dataclass
from pathlib import Path

import pytest
from pydantic import BaseModel

from serverless_cors.config.properties import GatewayProperties, LoggingProperties, PreflightProperties
from serverless_cors.core.config import Config, config_properties
from serverless_cors.kernel.exceptions import ConfigurationException


class TestPackagedDefaults:
    def test_defaults_have_preflight_mode(self):
        defaults = Config._load_defaults()
        assert defaults["cors"]["preflight"]["mode"] == "model"

    def test_defaults_have_gateway_description(self):
        defaults = Config._load_defaults()
        assert defaults["cors"]["gateway"]["description"] == "Serverless deployment"

    def test_from_file_without_path_loads_defaults(self):
        config = Config.from_file()
        assert config.get("cors.logging.level.root") == "INFO"
        assert config.loaded_sources == ["serverless-cors-defaults.yaml (defaults)"]


class TestFromFile:
    def test_yaml_overrides_defaults(self, tmp_path: Path):
        config_file = tmp_path / "serverless-cors.yaml"
        config_file.write_text("cors:\n  preflight:\n    mode: gateway\n")
        config = Config.from_file(config_file)
        assert config.get("cors.preflight.mode") == "gateway"
        assert config.get("cors.gateway.description") == "Serverless deployment"

    def test_toml_file(self, tmp_path: Path):
        config_file = tmp_path / "serverless-cors.toml"
        config_file.write_text('[cors.gateway]\nrest_api_id = "abc123"\n')
        config = Config.from_file(config_file, load_defaults=False)
        assert config.get("cors.gateway.rest_api_id") == "abc123"

    def test_profile_overlay(self, tmp_path: Path):
        (tmp_path / "serverless-cors.yaml").write_text("cors:\n  gateway:\n    region: us-east-1\n")
        (tmp_path / "serverless-cors-prod.yaml").write_text("cors:\n  gateway:\n    region: eu-west-1\n")
        config = Config.from_file(tmp_path / "serverless-cors.yaml", active_profiles=["prod"])
        assert config.get("cors.gateway.region") == "eu-west-1"
        assert len(config.loaded_sources) == 3

    def test_missing_file_returns_defaults_only(self, tmp_path: Path):
        config = Config.from_file(tmp_path / "nonexistent.yaml")
        assert config.get("cors.preflight.mode") == "model"
        assert len(config.loaded_sources) == 1


class TestGet:
    def test_dot_notation(self):
        config = Config({"cors": {"gateway": {"region": "eu-west-1"}}})
        assert config.get("cors.gateway.region") == "eu-west-1"

    def test_missing_key_returns_default(self):
        assert Config({}).get("cors.gateway.region", "us-east-1") == "us-east-1"

    def test_env_var_wins(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("CORS_GATEWAY_REGION", "ap-south-1")
        config = Config({"cors": {"gateway": {"region": "eu-west-1"}}})
        assert config.get("cors.gateway.region") == "ap-south-1"

    def test_placeholder_with_default(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("API_ID", raising=False)
        config = Config({"cors": {"gateway": {"rest_api_id": "${API_ID:fallback}"}}})
        assert config.get("cors.gateway.rest_api_id") == "fallback"

    def test_placeholder_from_env(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("API_ID", "xyz789")
        config = Config({"cors": {"gateway": {"rest_api_id": "${API_ID}"}}})
        assert config.get("cors.gateway.rest_api_id") == "xyz789"

    def test_unresolvable_placeholder_raises(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("NOPE", raising=False)
        config = Config({"cors": {"gateway": {"rest_api_id": "${NOPE}"}}})
        with pytest.raises(ValueError, match="Cannot resolve placeholder"):
            config.get("cors.gateway.rest_api_id")

    def test_placeholder_from_config_key(self):
        config = Config({"cors": {"gateway": {"region": "eu-west-1", "description": "deploy ${cors.gateway.region}"}}})
        assert config.get("cors.gateway.description") == "deploy eu-west-1"

    def test_circular_placeholder_raises(self):
        config = Config({"a": "${b}", "b": "${a}"})
        with pytest.raises(ValueError, match="nest too deeply"):
            config.get("a")


class TestBind:
    def test_bind_defaults(self):
        config = Config.from_file()
        assert config.bind(PreflightProperties).mode == "model"
        gateway = config.bind(GatewayProperties)
        assert gateway.rest_api_id is None
        assert gateway.description == "Serverless deployment"
        assert config.bind(LoggingProperties).level == {"root": "INFO"}

    def test_bind_env_override(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("CORS_PREFLIGHT_MODE", "gateway")
        assert Config.from_file().bind(PreflightProperties).mode == "gateway"

    def test_bind_invalid_value_fails_fast(self):
        config = Config({"cors": {"preflight": {"mode": "sometimes"}}})
        with pytest.raises(ConfigurationException) as exc_info:
            config.bind(PreflightProperties)
        assert exc_info.value.code == "CORS_CONFIGURATION_ERROR"
        assert exc_info.value.context["model"] == "PreflightProperties"
        assert "mode" in str(exc_info.value)

    def test_bind_custom_model(self):
        @config_properties(prefix="cors.retry")
        class RetryProperties(BaseModel):
            attempts: int = 1

        config = Config({"cors": {"retry": {"attempts": "3"}}})
        assert config.bind(RetryProperties).attempts == 3

    def test_bind_undecorated_class_raises(self):
        @dataclass
        class Plain:
            value: int = 0

        with pytest.raises(ValueError, match="not decorated"):
            Config({}).bind(Plain)
