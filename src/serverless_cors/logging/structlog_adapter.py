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
"""StructlogAdapter: structlog-backed LoggingPort fed from ``cors.logging``."""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from serverless_cors.config.properties import LoggingProperties
from serverless_cors.core.config import Config


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


def _renderer(fmt: str) -> structlog.types.Processor:
    if fmt == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


class StructlogAdapter:
    """Default logging adapter backed by structlog."""

    def __init__(self) -> None:
        self.properties = LoggingProperties()

    def configure(self, config: Config) -> None:
        """Install processors and apply ``root`` plus per-logger levels."""
        self.properties = config.bind(LoggingProperties)
        levels = dict(self.properties.level)
        root = levels.pop("root", "INFO")

        structlog.configure(
            processors=[
                structlog.contextvars.merge_contextvars,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.processors.TimeStamper(fmt="iso"),
                _renderer(self.properties.format),
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

        # Hosts print their own progress to stderr; keep ours on the same stream.
        logging.basicConfig(format="%(message)s", stream=sys.stderr, level=_level(root), force=True)
        for name, level in levels.items():
            logging.getLogger(name).setLevel(_level(level))

    def get_logger(self, name: str) -> Any:
        return structlog.get_logger(name)
