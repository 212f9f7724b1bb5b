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
"""StructlogAdapter — default LoggingPort implementation using structlog.

Reads the ``flymap.logging`` section::

    flymap:
      logging:
        format: json            # or "console"
        level:
          root: INFO
          flymap.mapping.patch: DEBUG
"""

from __future__ import annotations

import logging
import sys

import structlog

from flymap.core.config import Config

_LEVELS_KEY = "flymap.logging.level"
_FORMAT_KEY = "flymap.logging.format"


class StructlogAdapter:
    """Logging adapter backed by structlog over stdlib logging.

    Per-field patch failures are logged with ``exc_info``; the JSON
    renderer gets them pre-formatted, the console renderer prints them
    itself.
    """

    def __init__(self) -> None:
        self._root_level: str = "INFO"
        self._format: str = "console"
        self._module_levels: dict[str, str] = {}

    def configure(self, config: Config) -> None:
        levels = dict(config.get_section(_LEVELS_KEY))
        self._root_level = str(levels.pop("root", "INFO")).upper()
        self._module_levels = {k: str(v).upper() for k, v in levels.items()}
        self._format = str(config.get(_FORMAT_KEY, "console")).lower()

        self._setup_structlog()
        for module, level in self._module_levels.items():
            self.set_level(module, level)

    def set_level(self, name: str, level: str) -> None:
        """Set the log level for one stdlib logger (e.g. ``flymap.mapping``)."""
        logging.getLogger(name).setLevel(getattr(logging, level.upper(), logging.INFO))

    def _setup_structlog(self) -> None:
        processors: list[structlog.types.Processor] = [
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
        ]

        if self._format == "json":
            processors += [
                structlog.processors.format_exc_info,
                structlog.processors.UnicodeDecoder(),
                structlog.processors.JSONRenderer(default=repr),
            ]
        else:
            processors += [
                structlog.processors.UnicodeDecoder(),
                structlog.dev.ConsoleRenderer(),
            ]

        structlog.configure(
            processors=processors,
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

        logging.basicConfig(
            format="%(message)s",
            stream=sys.stdout,
            level=getattr(logging, self._root_level, logging.INFO),
            force=True,
        )
