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
"""Tests for GenericMapper — validated entity/DTO conversion and patching."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated

import pytest
from pydantic import Field

from flymap.kernel.exceptions import InvalidArgumentException, ValidationException
from flymap.mapping.generic import GenericMapper
from flymap.mapping.mapper import Mapper
from flymap.mapping.strategy import SetToNullStrategy, SkipNullStrategy
from flymap.validation.helpers import ConstraintViolation


@dataclass
class ProductEntity:
    sku: str
    price: float
    stock: int = 0
    id: int | None = None


@dataclass
class ProductDTO:
    sku: Annotated[str, Field(min_length=3)]
    price: Annotated[float, Field(gt=0)]
    stock: Annotated[int, Field(ge=0)] = 0


@dataclass
class PatchDTO:
    sku: str | None = None
    price: float | None = None
    stock: int | None = None


class RecordingValidator:
    def __init__(self, violations=None):
        self.seen = []
        self._violations = violations or []

    def validate(self, obj):
        self.seen.append(obj)
        return list(self._violations)


@pytest.fixture
def products() -> GenericMapper[ProductEntity, ProductDTO]:
    return GenericMapper(Mapper(), ProductEntity, ProductDTO)


class TestToDTO:
    def test_maps_and_validates(self, products):
        dto = products.to_dto(ProductEntity(id=1, sku="ABC-1", price=9.99, stock=4))

        assert dto == ProductDTO(sku="ABC-1", price=9.99, stock=4)

    def test_invalid_result_raises_with_joined_messages(self, products):
        with pytest.raises(ValidationException) as exc_info:
            products.to_dto(ProductEntity(id=1, sku="A", price=-1.0, stock=-5))

        message = str(exc_info.value)
        assert message.startswith("Validation failed:\n")
        lines = message.splitlines()[1:]
        assert len(lines) == 3
        assert any(line.startswith("sku: ") for line in lines)
        assert any(line.startswith("price: ") for line in lines)
        assert any(line.startswith("stock: ") for line in lines)
        assert exc_info.value.code == "VALIDATION_ERROR"

    def test_list_conversion(self, products):
        dtos = products.to_dto_list(
            [
                ProductEntity(id=1, sku="AAA", price=1.0),
                ProductEntity(id=2, sku="BBB", price=2.0),
            ]
        )

        assert [d.sku for d in dtos] == ["AAA", "BBB"]

    def test_list_conversion_fails_on_first_invalid(self, products):
        with pytest.raises(ValidationException):
            products.to_dto_list(
                [
                    ProductEntity(id=1, sku="AAA", price=1.0),
                    ProductEntity(id=2, sku="B", price=2.0),
                ]
            )


class TestToEntity:
    def test_validates_then_maps(self, products):
        entity = products.to_entity(ProductDTO(sku="XYZ", price=5.0, stock=2))

        assert entity == ProductEntity(sku="XYZ", price=5.0, stock=2)

    def test_invalid_dto_is_rejected_before_mapping(self):
        validator = RecordingValidator([ConstraintViolation("sku", "too short")])
        products = GenericMapper(Mapper(), ProductEntity, ProductDTO, validator=validator)

        with pytest.raises(ValidationException, match="sku: too short"):
            products.to_entity(ProductDTO(sku="A", price=1.0))

        assert len(validator.seen) == 1

    def test_list_conversion(self):
        validator = RecordingValidator()
        products = GenericMapper(Mapper(), ProductDTO, ProductDTO, validator=validator)
        dtos = [ProductDTO(sku="AAA", price=1.0), ProductDTO(sku="BBB", price=2.0)]

        result = products.to_entity_list(dtos)

        assert result == dtos
        assert validator.seen == dtos


class TestPatch:
    def test_patch_uses_set_to_null_by_default(self, products):
        existing = PatchDTO(sku="AAA", price=1.0, stock=3)

        products.patch(PatchDTO(price=2.5), existing, ["stock"])

        assert existing == PatchDTO(sku="AAA", price=2.5, stock=None)
        assert isinstance(products.null_handling_strategy, SetToNullStrategy)

    def test_strategy_setter(self, products):
        products.null_handling_strategy = SkipNullStrategy()
        existing = PatchDTO(sku="AAA", price=1.0, stock=3)

        products.patch(PatchDTO(price=2.5), existing, ["stock"])

        assert existing.stock == 3

    def test_strategy_from_constructor(self):
        products = GenericMapper(Mapper(), ProductEntity, ProductDTO, null_handling_strategy=SkipNullStrategy())

        assert isinstance(products.null_handling_strategy, SkipNullStrategy)

    def test_exclude_from_constructor(self):
        products = GenericMapper(Mapper(), ProductEntity, ProductDTO, exclude={"sku"})
        existing = PatchDTO(sku="AAA", price=1.0)

        products.patch(PatchDTO(sku="ZZZ", price=3.0), existing)

        assert existing == PatchDTO(sku="AAA", price=3.0)

    def test_patch_rejects_none(self, products):
        with pytest.raises(InvalidArgumentException):
            products.patch(PatchDTO(), None)

    def test_types_are_exposed(self, products):
        assert products.entity_type is ProductEntity
        assert products.dto_type is ProductDTO
