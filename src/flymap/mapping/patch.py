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
"""Patch engine — partial updates of one object graph from another.

Given an *update* object and an *existing* object of the same shape, the
engine walks the update's declared fields and, for each one:

1. skips it entirely when it carries the ignore marker (or is excluded);
2. overwrites the existing field when the update holds a scalar;
3. recurses when both sides hold a value with its own fields;
4. substitutes the update value wholesale when the existing side is
   ``None``, frozen, or has no fields to merge;
5. delegates to the :class:`NullHandlingStrategy` when the update holds
   ``None`` and the field name is null-eligible;
6. leaves the existing field alone otherwise.

Example::

    patcher = Patcher()
    patcher.patch(UserDTO(name="Alice", age=None), existing, ["age"])

Field lookup and assignment failures are logged and only abandon the
field concerned; the rest of the patch still applies.  The null-eligible
names are matched at every nesting level, not only at the top.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import structlog

from flymap.kernel.exceptions import FieldAccessException, InvalidArgumentException
from flymap.mapping.fields import FieldDescriptor, describe, find_field, has_fields, is_frozen, is_scalar
from flymap.mapping.strategy import NullHandlingStrategy, SetToNullStrategy

logger = structlog.get_logger("flymap.mapping.patch")


class Patcher:
    """Applies partial updates field by field.

    Args:
        null_handling_strategy: What a null-eligible ``None`` does to the
            existing object.  Defaults to :class:`SetToNullStrategy`.
        exclude: Field names never read nor written, at any depth.
    """

    def __init__(
        self,
        null_handling_strategy: NullHandlingStrategy | None = None,
        exclude: Iterable[str] = (),
    ) -> None:
        self._strategy: NullHandlingStrategy = null_handling_strategy or SetToNullStrategy()
        self._exclude: frozenset[str] = frozenset(exclude)

    @property
    def null_handling_strategy(self) -> NullHandlingStrategy:
        return self._strategy

    @null_handling_strategy.setter
    def null_handling_strategy(self, strategy: NullHandlingStrategy) -> None:
        self._strategy = strategy

    @property
    def exclude(self) -> frozenset[str]:
        return self._exclude

    def patch(
        self,
        update: Any,
        existing: Any,
        null_field_names: Iterable[str] | None = None,
    ) -> None:
        """Patch *existing* in place with the values carried by *update*.

        Args:
            update: Object holding the new values.  Never mutated.
            existing: Object to patch in place.
            null_field_names: Field names that may be nulled when *update*
                holds ``None`` for them.  A bare string names one field.

        Raises:
            InvalidArgumentException: If either object is ``None``.
        """
        if update is None or existing is None:
            raise InvalidArgumentException("Both update and existing objects must be non-null")
        self._update_fields(update, existing, _eligible_names(null_field_names), set())

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _update_fields(
        self,
        update: Any,
        existing: Any,
        null_field_names: frozenset[str],
        in_progress: set[tuple[int, int]],
    ) -> None:
        pair = (id(update), id(existing))
        if pair in in_progress:
            logger.warning(
                "patch_cycle_skipped",
                update_type=type(update).__qualname__,
                existing_type=type(existing).__qualname__,
            )
            return

        in_progress.add(pair)
        try:
            for field in describe(update):
                self._process_field(update, existing, field, null_field_names, in_progress)
        finally:
            in_progress.discard(pair)

    def _process_field(
        self,
        update: Any,
        existing: Any,
        field: FieldDescriptor,
        null_field_names: frozenset[str],
        in_progress: set[tuple[int, int]],
    ) -> None:
        if self._should_skip(field):
            return
        try:
            value = field.get(update)
            if value is not None:
                target = find_field(existing, field.name)
                self._update_value(existing, target, value, null_field_names, in_progress)
            elif field.name in null_field_names:
                self._strategy.handle(field, update, existing)
                logger.debug(
                    "field_null_handled",
                    field=field.name,
                    strategy=type(self._strategy).__name__,
                )
        except FieldAccessException as exc:
            logger.error("field_access_failed", field=field.name, error=str(exc), exc_info=exc)

    def _should_skip(self, field: FieldDescriptor) -> bool:
        if field.ignored or field.name in self._exclude:
            logger.debug("field_ignored", field=field.name)
            return True
        return False

    def _update_value(
        self,
        existing: Any,
        target: FieldDescriptor,
        value: Any,
        null_field_names: frozenset[str],
        in_progress: set[tuple[int, int]],
    ) -> None:
        if not is_scalar(value) and has_fields(value):
            current = target.get(existing)
            if current is not None and has_fields(current) and not is_frozen(current):
                self._update_fields(value, current, null_field_names, in_progress)
                logger.debug("field_merged", field=target.name)
                return

        target.set(existing, value)
        logger.debug("field_updated", field=target.name, value=value)


def _eligible_names(names: Iterable[str] | None) -> frozenset[str]:
    if isinstance(names, str):
        return frozenset((names,))
    return frozenset(names or ())
