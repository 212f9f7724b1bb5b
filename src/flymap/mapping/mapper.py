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
"""Generic type-to-type mapper.

Maps between any two types (dataclasses, pydantic models, annotated plain
classes) by matching field names.  Supports custom field renaming, value
transformers, field exclusion, nested types and a strictness policy.

Example::

    mapper = Mapper()
    dto = mapper.map(user_entity, UserDTO)

    # With custom field mapping
    mapper.add_mapping(User, UserDTO, field_map={"username": "name"})
    dto = mapper.map(user, UserDTO)

    # Every destination field must be matched
    mapper = Mapper(matching=MatchingStrategy.STRICT)
"""

from __future__ import annotations

import dataclasses
import types
from collections.abc import Callable
from enum import StrEnum
from typing import Any, TypeVar, Union, get_args, get_origin

from pydantic import BaseModel, ValidationError

from flymap.kernel.exceptions import MappingException
from flymap.mapping.fields import describe, has_fields

S = TypeVar("S")
D = TypeVar("D")

_COLLECTION_ORIGINS = (list, tuple, set, frozenset)


class MatchingStrategy(StrEnum):
    """How strictly destination fields must be matched by source fields."""

    STANDARD = "standard"
    STRICT = "strict"


@dataclasses.dataclass
class MappingConfig:
    """Configuration for a type mapping.

    Attributes:
        field_map: Maps source field names to destination field names.
        transformers: Functions to transform values, keyed by dest field name.
        exclude: Destination fields to exclude from mapping.
    """

    field_map: dict[str, str] = dataclasses.field(default_factory=dict)
    transformers: dict[str, Callable[[Any], Any]] = dataclasses.field(default_factory=dict)
    exclude: set[str] = dataclasses.field(default_factory=set)


class Mapper:
    """Auto-maps between types by matching field names.

    Under ``MatchingStrategy.STANDARD`` destination fields without a
    matching source field keep their defaults.  Under ``STRICT`` every
    non-excluded destination field must be matched, otherwise a
    :class:`MappingException` is raised.
    """

    def __init__(self, matching: MatchingStrategy | str = MatchingStrategy.STANDARD) -> None:
        self._matching = MatchingStrategy(matching)
        self._mappings: dict[tuple[type, type], MappingConfig] = {}

    @property
    def matching(self) -> MatchingStrategy:
        return self._matching

    @matching.setter
    def matching(self, matching: MatchingStrategy | str) -> None:
        self._matching = MatchingStrategy(matching)

    def add_mapping(
        self,
        source_type: type[S],
        dest_type: type[D],
        *,
        field_map: dict[str, str] | None = None,
        transformers: dict[str, Callable[[Any], Any]] | None = None,
        exclude: set[str] | None = None,
    ) -> None:
        """Register a custom mapping between source and destination types.

        Args:
            source_type: The source type to map from.
            dest_type: The destination type to map to.
            field_map: Maps source field names to destination field names.
            transformers: Functions to transform field values (keyed by dest
                field name).
            exclude: Destination fields to exclude from mapping.
        """
        self._mappings[(source_type, dest_type)] = MappingConfig(
            field_map=field_map or {},
            transformers=transformers or {},
            exclude=exclude or set(),
        )

    def map(self, source: S, dest_type: type[D]) -> D:
        """Map source object to destination type.

        Field matching strategy:

        1. Check registered ``field_map`` for explicit source -> dest mapping.
        2. Match by identical field name.
        3. Apply transformers if registered.
        4. Skip fields in exclude set.
        5. Map nested values onto nested destination types.

        Raises:
            MappingException: If the destination cannot be built, or a field
                is left unmatched under the strict policy.
        """
        config = self._mappings.get((type(source), dest_type), MappingConfig())
        source_data = self._extract_fields(source)

        kwargs: dict[str, object] = {}
        unmatched: list[str] = []
        for dest_field in describe(dest_type):
            name = dest_field.name
            if name in config.exclude:
                continue

            source_field = self._resolve_source_field(name, config.field_map)
            if source_field not in source_data:
                unmatched.append(name)
                continue

            value = source_data[source_field]
            if name in config.transformers:
                value = config.transformers[name](value)
            else:
                value = self._map_nested(value, dest_field.type)
            kwargs[name] = value

        if unmatched and self._matching is MatchingStrategy.STRICT:
            raise MappingException(
                f"Unmatched destination fields mapping {type(source).__name__} -> "
                f"{dest_type.__name__}: {', '.join(unmatched)}",
                code="MAPPING_ERROR",
                context={"unmatched": unmatched},
            )

        try:
            return dest_type(**kwargs)
        except ValidationError as exc:
            raise MappingException(
                f"Cannot build {dest_type.__name__} from {type(source).__name__}: {exc}",
                code="MAPPING_ERROR",
                context={"errors": exc.errors()},
            ) from exc
        except TypeError as exc:
            raise MappingException(
                f"Cannot build {dest_type.__name__} from {type(source).__name__}: {exc}",
                code="MAPPING_ERROR",
            ) from exc

    def map_list(self, sources: list[S], dest_type: type[D]) -> list[D]:
        """Map a list of source objects to destination type."""
        return [self.map(s, dest_type) for s in sources]

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _map_nested(self, value: Any, dest_hint: Any) -> Any:
        """Map *value* onto the mappable type named by *dest_hint*, if any."""
        if value is None:
            return None

        origin = get_origin(dest_hint)
        if origin in _COLLECTION_ORIGINS and isinstance(value, _COLLECTION_ORIGINS):
            args = [a for a in get_args(dest_hint) if a is not Ellipsis]
            if len(args) == 1:
                return origin(self._map_nested(item, args[0]) for item in value)
            return value

        target = self._mappable_target(dest_hint)
        if target is None or isinstance(value, target) or not has_fields(value):
            return value
        return self.map(value, target)

    @staticmethod
    def _mappable_target(hint: Any) -> type | None:
        """Return the dataclass/model type named by *hint* (unwrapping Optional)."""
        if get_origin(hint) is Union or isinstance(hint, types.UnionType):
            candidates = [a for a in get_args(hint) if a is not type(None)]
            if len(candidates) != 1:
                return None
            hint = candidates[0]
        if not isinstance(hint, type):
            return None
        if dataclasses.is_dataclass(hint) or issubclass(hint, BaseModel):
            return hint
        return None

    @staticmethod
    def _resolve_source_field(
        dest_field: str,
        field_map: dict[str, str],
    ) -> str:
        """Find the source field name for a destination field.

        ``field_map`` is ``{source_name: dest_name}``, so we perform a
        reverse lookup.  If no explicit mapping exists the destination
        field name is assumed to be the same as the source field name.
        """
        for src, dst in field_map.items():
            if dst == dest_field:
                return src
        return dest_field

    @staticmethod
    def _extract_fields(obj: object) -> dict[str, object]:
        """Extract field values from an object, one level deep."""
        return {f.name: getattr(obj, f.name) for f in describe(obj) if hasattr(obj, f.name)}
