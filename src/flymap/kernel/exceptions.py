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
"""Unified exception hierarchy for flymap.

All library exceptions inherit from FlymapException, so callers can catch
one type for any mapping failure or target a specific subclass.

Categories:
- InvalidArgumentException: bad top-level arguments, fatal to the call
- FieldAccessException: per-field lookup/assignment failures
- ValidationException: converted objects violating their constraints
- MappingException: the conversion itself cannot build the target
- BeanRegistrationException: mapper-bean scanning and registry errors
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class FlymapException(Exception):
    """Base exception for all flymap errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "FIELD_NOT_FOUND").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Argument Exceptions
# =============================================================================


class InvalidArgumentException(FlymapException, ValueError):
    """A required argument was missing or unusable."""

    def __init__(self, message: str, context: dict | None = None) -> None:
        super().__init__(message, code="INVALID_ARGUMENT", context=context)


# =============================================================================
# Field Access Exceptions
# =============================================================================


class FieldAccessException(FlymapException):
    """A single field could not be read or written.

    Carries the offending field name and owning type so the patch engine
    can log the failure and move on to the next field.
    """

    def __init__(
        self,
        message: str,
        field_name: str,
        owner: type | None = None,
        code: str | None = None,
    ) -> None:
        super().__init__(
            message,
            code=code,
            context={
                "field": field_name,
                "owner": owner.__qualname__ if owner is not None else None,
            },
        )
        self.field_name = field_name
        self.owner = owner


class FieldNotFoundException(FieldAccessException):
    """The target object has no field with the requested name."""

    def __init__(self, field_name: str, owner: type) -> None:
        super().__init__(
            f"No field '{field_name}' on {owner.__qualname__}",
            field_name,
            owner,
            code="FIELD_NOT_FOUND",
        )


class FieldAccessDeniedException(FieldAccessException):
    """The field exists but refuses to be read or assigned."""

    def __init__(self, field_name: str, owner: type, reason: str = "") -> None:
        message = f"Cannot access field '{field_name}' on {owner.__qualname__}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, field_name, owner, code="FIELD_ACCESS_DENIED")


# =============================================================================
# Conversion Exceptions
# =============================================================================


class ValidationException(FlymapException):
    """Constraint validation failures."""


class MappingException(FlymapException):
    """The source object could not be mapped onto the destination type."""


# =============================================================================
# Registration Exceptions
# =============================================================================


class BeanRegistrationException(FlymapException):
    """Mapper-bean scanning or registration failed."""
