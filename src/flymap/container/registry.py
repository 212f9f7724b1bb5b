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
"""Name-keyed registry of mapper beans."""

from __future__ import annotations

import difflib
from dataclasses import dataclass, field
from typing import Any, TypeVar, cast

import structlog

from flymap.container.stereotypes import BEAN_NAME_ATTR
from flymap.kernel.exceptions import BeanRegistrationException

T = TypeVar("T")

logger = structlog.get_logger("flymap.container")


@dataclass
class Registration:
    """Metadata for a registered mapper bean."""

    impl_type: type
    name: str
    instance: Any = field(default=None, repr=False)


class MapperBeanRegistry:
    """Holds mapper beans by name and hands out lazily-built singletons.

    Bean names default to the class's simple name (or the ``name`` given
    to ``@mapper_bean``) and must be unique.
    """

    def __init__(self) -> None:
        self._named: dict[str, Registration] = {}

    def register(self, cls: type, name: str = "") -> str:
        """Register *cls* and return the bean name used.

        Registering the same class under the same name again is a no-op.

        Raises:
            BeanRegistrationException: If the name belongs to another class.
        """
        bean_name = name or getattr(cls, BEAN_NAME_ATTR, "") or cls.__name__
        existing = self._named.get(bean_name)
        if existing is not None:
            if existing.impl_type is cls:
                return bean_name
            raise BeanRegistrationException(
                f"Mapper bean name '{bean_name}' already registered for "
                f"{existing.impl_type.__qualname__}, cannot register {cls.__qualname__}",
                code="BEAN_REGISTRATION_ERROR",
                context={"name": bean_name},
            )
        self._named[bean_name] = Registration(impl_type=cls, name=bean_name)
        logger.debug("mapper_bean_registered", name=bean_name, type=cls.__qualname__)
        return bean_name

    def register_instance(self, name: str, instance: Any) -> None:
        """Register an already-built bean under *name*."""
        self.register(type(instance), name)
        self._named[name].instance = instance

    def get(self, name: str) -> Any:
        """Return the singleton bean registered under *name*."""
        reg = self._named.get(name)
        if reg is None:
            suggestions = difflib.get_close_matches(name, list(self._named), n=3, cutoff=0.4)
            hint = f" Did you mean: {', '.join(suggestions)}?" if suggestions else ""
            raise BeanRegistrationException(
                f"No mapper bean named '{name}'.{hint}",
                code="BEAN_REGISTRATION_ERROR",
                context={"name": name, "suggestions": suggestions},
            )
        if reg.instance is None:
            try:
                reg.instance = reg.impl_type()
            except TypeError as exc:
                raise BeanRegistrationException(
                    f"Cannot instantiate mapper bean '{name}' ({reg.impl_type.__qualname__}): {exc}",
                    code="BEAN_REGISTRATION_ERROR",
                    context={"name": name},
                ) from exc
        return reg.instance

    def get_by_type(self, cls: type[T]) -> T:
        """Return the singleton bean whose class is exactly *cls*."""
        for reg in self._named.values():
            if reg.impl_type is cls:
                return cast(T, self.get(reg.name))
        raise BeanRegistrationException(
            f"No mapper bean of type {cls.__qualname__}",
            code="BEAN_REGISTRATION_ERROR",
            context={"type": cls.__qualname__},
        )

    def contains(self, name: str) -> bool:
        return name in self._named

    def names(self) -> list[str]:
        return list(self._named)

    def __len__(self) -> int:
        return len(self._named)
