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
"""The ``@mapper_bean`` stereotype.

Marks a class for discovery by :func:`flymap.container.scanner.scan_package`::

    @mapper_bean
    class UserMapper(GenericMapper[UserEntity, UserDTO]):
        def __init__(self) -> None:
            super().__init__(Mapper(), UserEntity, UserDTO)

    @mapper_bean(name="orders")
    class OrderMapper: ...
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar, overload

T = TypeVar("T", bound=type)

MAPPER_BEAN_ATTR = "__flymap_mapper_bean__"
BEAN_NAME_ATTR = "__flymap_bean_name__"


@overload
def mapper_bean(cls: T) -> T: ...


@overload
def mapper_bean(*, name: str = "") -> Callable[[T], T]: ...


def mapper_bean(cls: T | None = None, *, name: str = "") -> T | Callable[[T], T]:
    def decorator(cls: T) -> T:
        setattr(cls, MAPPER_BEAN_ATTR, True)
        if name:
            setattr(cls, BEAN_NAME_ATTR, name)
        return cls

    if cls is not None:
        return decorator(cls)
    return decorator


def is_mapper_bean(cls: type) -> bool:
    # only the decorated class itself, not its subclasses
    return bool(cls.__dict__.get(MAPPER_BEAN_ATTR, False))
