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
"""Tests for the null-handling strategies."""

from dataclasses import dataclass

import pytest

from flymap.kernel.exceptions import FieldAccessDeniedException, FieldNotFoundException
from flymap.mapping.fields import find_field
from flymap.mapping.strategy import (
    NullHandling,
    NullHandlingStrategy,
    SetToNullStrategy,
    SkipNullStrategy,
    strategy_for,
)


@dataclass
class Item:
    title: str | None = None
    price: float | None = None


@dataclass
class Other:
    title: str | None = None


@dataclass(frozen=True)
class FrozenItem:
    title: str | None = None
    price: float | None = None


class TestProtocolConformance:
    def test_builtin_strategies_satisfy_protocol(self):
        assert isinstance(SkipNullStrategy(), NullHandlingStrategy)
        assert isinstance(SetToNullStrategy(), NullHandlingStrategy)


class TestSkipNullStrategy:
    def test_leaves_existing_untouched(self):
        existing = Item(title="Lamp", price=12.5)
        SkipNullStrategy().handle(find_field(Item, "price"), Item(title="Lamp"), existing)
        assert existing == Item(title="Lamp", price=12.5)

    def test_missing_field_is_not_an_error(self):
        existing = Other(title="x")
        SkipNullStrategy().handle(find_field(Item, "price"), Item(), existing)
        assert existing.title == "x"


class TestSetToNullStrategy:
    def test_nulls_same_named_field(self):
        existing = Item(title="Lamp", price=12.5)
        SetToNullStrategy().handle(find_field(Item, "price"), Item(), existing)
        assert existing == Item(title="Lamp", price=None)

    def test_works_across_different_types(self):
        existing = Other(title="x")
        SetToNullStrategy().handle(find_field(Item, "title"), Item(), existing)
        assert existing.title is None

    def test_does_not_touch_update_object(self):
        update = Item(title="keep")
        SetToNullStrategy().handle(find_field(Item, "price"), update, Item(price=1.0))
        assert update == Item(title="keep")

    def test_missing_field_raises_not_found(self):
        with pytest.raises(FieldNotFoundException) as exc_info:
            SetToNullStrategy().handle(find_field(Item, "price"), Item(), Other(title="x"))
        assert exc_info.value.field_name == "price"
        assert exc_info.value.code == "FIELD_NOT_FOUND"

    def test_frozen_field_raises_access_denied(self):
        existing = FrozenItem(title="Lamp", price=1.0)
        with pytest.raises(FieldAccessDeniedException):
            SetToNullStrategy().handle(find_field(Item, "price"), Item(), existing)
        assert existing.price == 1.0


class TestStrategyFor:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("skip", SkipNullStrategy),
            ("set-to-null", SetToNullStrategy),
            ("SET_TO_NULL", SetToNullStrategy),
            (NullHandling.SKIP, SkipNullStrategy),
        ],
    )
    def test_resolves_names(self, name, expected):
        assert isinstance(strategy_for(name), expected)

    def test_unknown_name_raises(self):
        with pytest.raises(ValueError, match="Unknown null-handling strategy"):
            strategy_for("drop")
