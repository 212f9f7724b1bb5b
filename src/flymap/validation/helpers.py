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
"""Pydantic-backed constraint validation.

Constraints are declared the pydantic way, on dataclasses and models
alike::

    @dataclass
    class UserDTO:
        name: Annotated[str, Field(min_length=1)]
        age: Annotated[int, Field(ge=0)] | None = None

:class:`PydanticValidator` reports every violation found on an instance;
:func:`ensure_valid` turns a non-empty report into one
:class:`ValidationException`.
"""

from __future__ import annotations

import dataclasses
from typing import Any, Protocol, TypeVar, runtime_checkable

import structlog
from pydantic import BaseModel, PydanticSchemaGenerationError, TypeAdapter, ValidationError

from flymap.kernel.exceptions import ValidationException

T = TypeVar("T", bound=BaseModel)

logger = structlog.get_logger("flymap.validation")


@dataclasses.dataclass(frozen=True)
class ConstraintViolation:
    """One failed constraint: dotted field path plus message."""

    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


@runtime_checkable
class Validator(Protocol):
    """Validation collaborator contract."""

    def validate(self, obj: Any) -> list[ConstraintViolation]: ...


class PydanticValidator:
    """Validates dataclasses and pydantic models against their declared constraints.

    Dataclass instances are checked through a ``TypeAdapter`` built once per
    class; a dataclass pydantic cannot build a schema for (a field typed as
    an arbitrary class) is treated as unconstrained.  Model instances are
    revalidated from their own by-alias dump, so assignments made after
    construction are checked too.  Other objects declare no constraints and
    always pass.
    """

    def __init__(self) -> None:
        self._adapters: dict[type, TypeAdapter[Any] | None] = {}

    def validate(self, obj: Any) -> list[ConstraintViolation]:
        try:
            if isinstance(obj, BaseModel):
                type(obj).model_validate(obj.model_dump(by_alias=True, round_trip=True))
            elif dataclasses.is_dataclass(obj) and not isinstance(obj, type):
                adapter = self._adapter(type(obj))
                if adapter is not None:
                    adapter.validate_python(_init_values(obj))
        except ValidationError as exc:
            return _violations(exc)
        return []

    def _adapter(self, cls: type) -> TypeAdapter[Any] | None:
        if cls not in self._adapters:
            try:
                self._adapters[cls] = TypeAdapter(cls)
            except PydanticSchemaGenerationError as exc:
                logger.debug("validation_schema_unavailable", shape=cls.__qualname__, error=str(exc))
                self._adapters[cls] = None
        return self._adapters[cls]


def ensure_valid(obj: Any, validator: Validator | None = None) -> None:
    """Raise if *obj* violates any of its constraints.

    Raises:
        ValidationException: With every violation joined one per line and
            the violations themselves in ``context["violations"]``.
    """
    violations = (validator or _default_validator).validate(obj)
    if violations:
        messages = "\n".join(str(v) for v in violations)
        raise ValidationException(
            f"Validation failed:\n{messages}",
            code="VALIDATION_ERROR",
            context={"violations": violations},
        )


def validate_model(model: type[T], data: dict[str, Any]) -> T:
    """Validate data against a Pydantic model.

    Raises:
        ValidationException: If validation fails, with structured error details.
    """
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        violations = _violations(exc)
        detail = "; ".join(str(v) for v in violations)
        raise ValidationException(
            f"Validation failed: {detail}",
            code="VALIDATION_ERROR",
            context={"errors": exc.errors(), "violations": violations},
        ) from exc


def _init_values(obj: Any) -> dict[str, Any]:
    # dataclasses.asdict recurses, so nested dataclasses are revalidated too
    data = dataclasses.asdict(obj)
    return {f.name: data[f.name] for f in dataclasses.fields(obj) if f.init}


def _violations(exc: ValidationError) -> list[ConstraintViolation]:
    return [
        ConstraintViolation(
            path=".".join(str(loc) for loc in error["loc"]) or "<root>",
            message=error["msg"],
        )
        for error in exc.errors()
    ]


_default_validator = PydanticValidator()
