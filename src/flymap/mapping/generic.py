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
"""GenericMapper — validated entity/DTO conversion plus patching.

Example::

    users = GenericMapper(Mapper(), UserEntity, UserDTO)
    dto = users.to_dto(entity)           # mapped, then validated
    entity = users.to_entity(dto)        # validated, then mapped
    users.patch(update_dto, existing_dto, ["nickname"])
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Generic, TypeVar

from flymap.mapping.mapper import Mapper
from flymap.mapping.patch import Patcher
from flymap.mapping.strategy import NullHandlingStrategy
from flymap.validation.helpers import PydanticValidator, Validator, ensure_valid

E = TypeVar("E")
D = TypeVar("D")


class GenericMapper(Generic[E, D]):
    """Converts between one entity type and one DTO type.

    Args:
        mapper: Conversion collaborator doing the field copying.
        entity_type: Entity class produced by :meth:`to_entity`.
        dto_type: DTO class produced by :meth:`to_dto`.
        validator: Validation collaborator; defaults to pydantic.
        null_handling_strategy: Strategy used by :meth:`patch`.
        exclude: Field names :meth:`patch` never touches.
    """

    def __init__(
        self,
        mapper: Mapper,
        entity_type: type[E],
        dto_type: type[D],
        *,
        validator: Validator | None = None,
        null_handling_strategy: NullHandlingStrategy | None = None,
        exclude: Iterable[str] = (),
    ) -> None:
        self._mapper = mapper
        self._entity_type = entity_type
        self._dto_type = dto_type
        self._validator: Validator = validator or PydanticValidator()
        self._patcher = Patcher(null_handling_strategy, exclude=exclude)

    @property
    def entity_type(self) -> type[E]:
        return self._entity_type

    @property
    def dto_type(self) -> type[D]:
        return self._dto_type

    @property
    def null_handling_strategy(self) -> NullHandlingStrategy:
        return self._patcher.null_handling_strategy

    @null_handling_strategy.setter
    def null_handling_strategy(self, strategy: NullHandlingStrategy) -> None:
        self._patcher.null_handling_strategy = strategy

    def to_dto(self, entity: E) -> D:
        """Convert an entity to a DTO and validate the DTO."""
        dto = self._mapper.map(entity, self._dto_type)
        ensure_valid(dto, self._validator)
        return dto

    def to_dto_list(self, entities: Iterable[E]) -> list[D]:
        return [self.to_dto(entity) for entity in entities]

    def to_entity(self, dto: D) -> E:
        """Validate a DTO, then convert it to an entity."""
        ensure_valid(dto, self._validator)
        return self._mapper.map(dto, self._entity_type)

    def to_entity_list(self, dtos: Iterable[D]) -> list[E]:
        return [self.to_entity(dto) for dto in dtos]

    def patch(self, update: Any, existing: Any, null_field_names: Iterable[str] | None = None) -> None:
        """Patch *existing* in place from *update*; see :class:`Patcher`."""
        self._patcher.patch(update, existing, null_field_names)
