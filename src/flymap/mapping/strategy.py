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
"""Null-handling strategies used by the patch engine.

When an update object carries ``None`` for a field that the caller listed
as null-eligible, the engine hands the field to a strategy instead of
deciding on its own.  Two strategies ship with flymap:

- :class:`SetToNullStrategy` assigns ``None`` to the same-named field on
  the existing object (the default).
- :class:`SkipNullStrategy` leaves the existing object untouched.

Strategies are stateless; one instance can be shared between mappers and
threads.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Protocol, runtime_checkable

from flymap.mapping.fields import FieldDescriptor, find_field


@runtime_checkable
class NullHandlingStrategy(Protocol):
    """Decides what a ``None`` update value does to the existing object."""

    def handle(self, field: FieldDescriptor, update: object, existing: object) -> None:
        """Apply a ``None`` update for *field* onto *existing*.

        Raises:
            FieldNotFoundException: *existing* has no same-named field.
            FieldAccessDeniedException: the field cannot be assigned.
        """
        ...


class SkipNullStrategy:
    """Leave the existing value untouched."""

    def handle(self, field: FieldDescriptor, update: object, existing: object) -> None:
        return None


class SetToNullStrategy:
    """Assign ``None`` to the same-named field on the existing object."""

    def handle(self, field: FieldDescriptor, update: object, existing: object) -> None:
        find_field(existing, field.name).set(existing, None)


class NullHandling(StrEnum):
    """Configuration names for the built-in strategies."""

    SKIP = "skip"
    SET_TO_NULL = "set-to-null"


_STRATEGIES: dict[NullHandling, type[NullHandlingStrategy]] = {
    NullHandling.SKIP: SkipNullStrategy,
    NullHandling.SET_TO_NULL: SetToNullStrategy,
}


def strategy_for(name: str | NullHandling) -> NullHandlingStrategy:
    """Build the strategy registered under *name* (``skip`` / ``set-to-null``)."""
    try:
        key = NullHandling(str(name).strip().lower().replace("_", "-"))
    except ValueError:
        valid = ", ".join(h.value for h in NullHandling)
        raise ValueError(f"Unknown null-handling strategy '{name}' (expected one of: {valid})") from None
    return _STRATEGIES[key]()
