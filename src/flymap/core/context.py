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
"""MappingContext — wires mappers, strategies and mapper beans from config.

Startup sequence:
1. Configure logging (from the flymap.logging section)
2. Bind ``MapperProperties`` (flymap.mapper.*)
3. Build the shared :class:`Mapper` with the configured matching policy
4. Resolve the default null-handling strategy
5. Scan ``base_package`` for ``@mapper_bean`` classes, if set
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import TypeVar

import structlog

from flymap.container.registry import MapperBeanRegistry
from flymap.container.scanner import scan_package
from flymap.core.config import Config
from flymap.core.properties import MapperProperties
from flymap.logging.port import LoggingPort
from flymap.logging.structlog_adapter import StructlogAdapter
from flymap.mapping.generic import GenericMapper
from flymap.mapping.mapper import Mapper, MatchingStrategy
from flymap.mapping.strategy import NullHandlingStrategy, strategy_for

E = TypeVar("E")
D = TypeVar("D")

logger = structlog.get_logger("flymap.core.context")


class MappingContext:
    """Holds the configured collaborators shared by every ``GenericMapper``."""

    def __init__(
        self,
        config: Config,
        *,
        logging_port: LoggingPort | None = None,
        registry: MapperBeanRegistry | None = None,
    ) -> None:
        self.config = config
        self._logging = logging_port or StructlogAdapter()
        self._logging.configure(config)

        self.properties: MapperProperties = config.bind(MapperProperties)
        self.mapper = Mapper(MatchingStrategy(self.properties.matching.lower()))
        self.null_handling_strategy: NullHandlingStrategy = strategy_for(self.properties.null_handling)
        self.registry = registry or MapperBeanRegistry()

        if self.properties.base_package:
            scan_package(self.properties.base_package, self.registry)

        logger.info(
            "mapping_context_ready",
            matching=self.mapper.matching.value,
            null_handling=type(self.null_handling_strategy).__name__,
            mapper_beans=len(self.registry),
        )

    @classmethod
    def from_config(cls, config: Config | None = None) -> MappingContext:
        """Build a context from *config* (packaged defaults when omitted)."""
        return cls(config if config is not None else Config.with_defaults())

    @classmethod
    def from_file(cls, path: str | Path, active_profiles: list[str] | None = None) -> MappingContext:
        return cls(Config.from_file(path, active_profiles=active_profiles))

    def generic_mapper(
        self,
        entity_type: type[E],
        dto_type: type[D],
        *,
        exclude: Iterable[str] = (),
    ) -> GenericMapper[E, D]:
        """Build a ``GenericMapper`` sharing this context's mapper and strategy."""
        return GenericMapper(
            self.mapper,
            entity_type,
            dto_type,
            null_handling_strategy=self.null_handling_strategy,
            exclude=exclude,
        )
