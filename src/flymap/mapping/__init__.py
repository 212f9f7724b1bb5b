"""flymap Mapping — conversion, patching and null-handling strategies."""

from flymap.mapping.fields import FieldDescriptor, IgnoreField, describe, find_field, ignore_field
from flymap.mapping.generic import GenericMapper
from flymap.mapping.mapper import MappingConfig, Mapper, MatchingStrategy
from flymap.mapping.patch import Patcher
from flymap.mapping.strategy import (
    NullHandling,
    NullHandlingStrategy,
    SetToNullStrategy,
    SkipNullStrategy,
    strategy_for,
)

__all__ = [
    "FieldDescriptor",
    "GenericMapper",
    "IgnoreField",
    "MappingConfig",
    "Mapper",
    "MatchingStrategy",
    "NullHandling",
    "NullHandlingStrategy",
    "Patcher",
    "SetToNullStrategy",
    "SkipNullStrategy",
    "describe",
    "find_field",
    "ignore_field",
    "strategy_for",
]
