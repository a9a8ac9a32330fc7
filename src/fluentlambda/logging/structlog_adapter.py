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
"""StructlogAdapter — default LoggingPort implementation using structlog."""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from fluentlambda.config.properties.logging import LoggingProperties
from fluentlambda.core.config import Config


def build_processors(log_format: str) -> list[structlog.types.Processor]:
    """Processor chain for *log_format* (``json`` or anything else for console)."""
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if log_format == "json":
        # ConsoleRenderer formats exceptions itself
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer())
    return processors


class StructlogAdapter:
    """Logging adapter backed by structlog, configured from ``fluentlambda.logging.*``.

    The ``root`` entry of ``fluentlambda.logging.level`` sets the stdlib root
    level; every other entry sets the level of the named logger, e.g.
    ``fluentlambda.capture: DEBUG`` to see stand-in and capture events.
    """

    def __init__(self) -> None:
        self._properties = LoggingProperties()

    @property
    def root_level(self) -> str:
        return str(self._properties.level.get("root", "INFO")).upper()

    @property
    def module_levels(self) -> dict[str, str]:
        return {name: str(level).upper() for name, level in self._properties.level.items() if name != "root"}

    @property
    def format(self) -> str:
        return str(self._properties.format).lower()

    def configure(self, config: Config) -> None:
        self._properties = config.bind(LoggingProperties)

        structlog.configure(
            processors=build_processors(self.format),
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        logging.basicConfig(
            format="%(message)s",
            stream=sys.stdout,
            level=getattr(logging, self.root_level, logging.INFO),
            force=True,
        )
        for name, level in self.module_levels.items():
            self.set_level(name, level)

    def get_logger(self, name: str) -> Any:
        return structlog.get_logger(name)

    def set_level(self, name: str, level: str) -> None:
        """Set the log level for a specific stdlib logger; unknown names fall back to INFO."""
        logging.getLogger(name).setLevel(getattr(logging, level.upper(), logging.INFO))
