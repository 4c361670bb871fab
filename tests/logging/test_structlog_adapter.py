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
"""Tests for StructlogAdapter, the default LoggingPort implementation."""

import logging

import structlog

from serverless_cors.core.config import Config
from serverless_cors.logging.port import LoggingPort
from serverless_cors.logging.structlog_adapter import StructlogAdapter


class TestStructlogAdapterConformance:
    def test_implements_logging_port(self):
        assert isinstance(StructlogAdapter(), LoggingPort)


class TestStructlogAdapterConfigure:
    def test_configure_with_empty_config(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({}))
        assert adapter.properties.format == "console"
        assert logging.getLogger().level == logging.INFO

    def test_configure_reads_root_level(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({"cors": {"logging": {"level": {"root": "debug"}}}}))
        assert logging.getLogger().level == logging.DEBUG

    def test_configure_json_format_renders_json(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({"cors": {"logging": {"format": "json"}}}))
        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_configure_applies_per_logger_levels(self):
        adapter = StructlogAdapter()
        config = Config({"cors": {"logging": {"level": {"root": "INFO", "serverless_cors.deployer": "warning"}}}})
        adapter.configure(config)
        assert logging.getLogger("serverless_cors.deployer").level == logging.WARNING

    def test_unknown_level_name_falls_back_to_info(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({"cors": {"logging": {"level": {"serverless_cors.hooks": "chatty"}}}}))
        assert logging.getLogger("serverless_cors.hooks").level == logging.INFO

    def test_configure_from_packaged_defaults(self):
        adapter = StructlogAdapter()
        adapter.configure(Config.from_file())
        assert adapter.properties.level["root"].upper() == "INFO"


class TestStructlogAdapterGetLogger:
    def test_get_logger_returns_bound_logger(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({}))
        logger = adapter.get_logger("serverless_cors.test")
        assert callable(getattr(logger, "info", None))
        assert callable(getattr(logger, "debug", None))


class TestLoggingPortProtocol:
    def test_non_conforming_class_is_not_instance(self):
        class Incomplete:
            def get_logger(self, name: str):
                return None

        assert not isinstance(Incomplete(), LoggingPort)
