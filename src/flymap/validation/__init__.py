"""flymap Validation — pydantic-backed constraint checks."""

from flymap.validation.helpers import (
    ConstraintViolation,
    PydanticValidator,
    Validator,
    ensure_valid,
    validate_model,
)

__all__ = [
    "ConstraintViolation",
    "PydanticValidator",
    "Validator",
    "ensure_valid",
    "validate_model",
]
