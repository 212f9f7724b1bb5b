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
"""Field descriptor tables and the ignore marker.

Every object shape the patch engine touches is described once as an
ordered table of :class:`FieldDescriptor` entries.  Tables are cached per
class, so repeated patches of the same types never re-inspect them.

Supported shapes, in lookup order:

1. dataclasses (declared field order)
2. pydantic ``BaseModel`` subclasses (``model_fields`` order)
3. plain classes with annotations (annotation order, MRO included)
4. un-annotated plain objects (instance ``__dict__``, not cached)

A field is ignored when it carries the ignore marker in any of its forms::

    @dataclass
    class UserDTO:
        name: str | None = None
        password: str | None = ignore_field(default=None)
        token: Annotated[str | None, IgnoreField] = None
"""

from __future__ import annotations

import dataclasses
import typing
from enum import Enum
from typing import Annotated, Any, ClassVar, get_args, get_origin

from pydantic import BaseModel, ValidationError

from flymap.kernel.exceptions import FieldAccessDeniedException, FieldNotFoundException

IGNORE_METADATA_KEY = "flymap_ignore"

SCALAR_TYPES: tuple[type, ...] = (bool, int, float, complex, str, bytes, bytearray)


class _IgnoreFieldMarker:
    """Singleton marker used inside ``Annotated[...]`` metadata."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "IgnoreField"

    def __reduce__(self) -> str:
        return "IgnoreField"


IgnoreField = _IgnoreFieldMarker()


def ignore_field(**kwargs: Any) -> Any:
    """Declare a dataclass field that the patch engine must never touch.

    Accepts the same keyword arguments as :func:`dataclasses.field`.
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[IGNORE_METADATA_KEY] = True
    return dataclasses.field(metadata=metadata, **kwargs)


@dataclasses.dataclass(frozen=True)
class FieldDescriptor:
    """One named, typed slot on an object shape.

    Attributes:
        name: Attribute name.
        type: Declared type (``Any`` when the shape has no annotation).
        ignored: Whether the field carries the ignore marker.
    """

    name: str
    type: Any = Any
    ignored: bool = False

    def get(self, obj: object) -> Any:
        try:
            return getattr(obj, self.name)
        except AttributeError as exc:
            raise FieldAccessDeniedException(self.name, type(obj), str(exc)) from exc

    def set(self, obj: object, value: Any) -> None:
        try:
            setattr(obj, self.name, value)
        except (AttributeError, TypeError, ValidationError) as exc:
            raise FieldAccessDeniedException(self.name, type(obj), str(exc)) from exc


_SHAPES: dict[type, dict[str, FieldDescriptor]] = {}


def describe(shape: object) -> tuple[FieldDescriptor, ...]:
    """Return the ordered field descriptors for a class or an instance."""
    return tuple(_table(shape).values())


def find_field(obj: object, name: str) -> FieldDescriptor:
    """Locate the field called *name* on *obj*.

    Raises:
        FieldNotFoundException: If *obj*'s shape declares no such field.
    """
    descriptor = _table(obj).get(name)
    if descriptor is None:
        raise FieldNotFoundException(name, obj if isinstance(obj, type) else type(obj))
    return descriptor


def is_scalar(value: object) -> bool:
    """Whether *value* belongs to the closed set of primitive-like types."""
    return isinstance(value, SCALAR_TYPES)


def has_fields(value: object) -> bool:
    """Whether *value* has named fields the patch engine can recurse into."""
    if value is None or isinstance(value, (type, Enum)) or is_scalar(value):
        return False
    if dataclasses.is_dataclass(value) or isinstance(value, BaseModel):
        return True
    if _describe_type(type(value)):
        return True
    return bool(getattr(value, "__dict__", None))


def is_frozen(value: object) -> bool:
    """Whether *value* refuses field assignment and can only be replaced whole.

    Covers tuples (``NamedTuple`` included), frozen dataclasses and frozen
    pydantic models.
    """
    if isinstance(value, tuple):
        return True
    if isinstance(value, BaseModel):
        return bool(value.model_config.get("frozen"))
    params = getattr(type(value), "__dataclass_params__", None)
    return params is not None and params.frozen


def clear_cache() -> None:
    """Drop every cached descriptor table."""
    _SHAPES.clear()


# ------------------------------------------------------------------
# Internal helpers
# ------------------------------------------------------------------


def _table(shape: object) -> dict[str, FieldDescriptor]:
    cls = shape if isinstance(shape, type) else type(shape)
    table = _describe_type(cls)
    if table or isinstance(shape, type):
        return table
    return {
        name: FieldDescriptor(name=name)
        for name in getattr(shape, "__dict__", {})
        if not name.startswith("__")
    }


def _describe_type(cls: type) -> dict[str, FieldDescriptor]:
    table = _SHAPES.get(cls)
    if table is None:
        if dataclasses.is_dataclass(cls):
            table = _describe_dataclass(cls)
        elif issubclass(cls, BaseModel):
            table = _describe_model(cls)
        else:
            table = _describe_annotated(cls)
        _SHAPES[cls] = table
    return table


def _describe_dataclass(cls: type) -> dict[str, FieldDescriptor]:
    hints = _type_hints(cls)
    table: dict[str, FieldDescriptor] = {}
    for f in dataclasses.fields(cls):
        hint = hints.get(f.name, f.type)
        table[f.name] = FieldDescriptor(
            name=f.name,
            type=_strip_annotated(hint),
            ignored=bool(f.metadata.get(IGNORE_METADATA_KEY)) or _has_marker(hint),
        )
    return table


def _describe_model(cls: type[BaseModel]) -> dict[str, FieldDescriptor]:
    # pydantic keeps unknown Annotated metadata on FieldInfo.metadata
    return {
        name: FieldDescriptor(
            name=name,
            type=info.annotation,
            ignored=any(isinstance(m, _IgnoreFieldMarker) for m in info.metadata),
        )
        for name, info in cls.model_fields.items()
    }


def _describe_annotated(cls: type) -> dict[str, FieldDescriptor]:
    if cls.__module__ == "builtins":
        return {}
    table: dict[str, FieldDescriptor] = {}
    for name, hint in _type_hints(cls).items():
        if get_origin(hint) is ClassVar or hint is ClassVar:
            continue
        table[name] = FieldDescriptor(
            name=name,
            type=_strip_annotated(hint),
            ignored=_has_marker(hint),
        )
    return table


def _type_hints(cls: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(cls, include_extras=True)
    except (NameError, TypeError):
        # Unresolvable forward references: fall back to raw annotations.
        hints: dict[str, Any] = {}
        for klass in reversed(cls.__mro__):
            hints.update(getattr(klass, "__annotations__", {}))
        return hints


def _has_marker(hint: Any) -> bool:
    if get_origin(hint) is Annotated:
        return any(isinstance(m, _IgnoreFieldMarker) for m in get_args(hint)[1:])
    return False


def _strip_annotated(hint: Any) -> Any:
    if get_origin(hint) is Annotated:
        return get_args(hint)[0]
    return hint
