"""flymap — entity/DTO mapping, validation and partial-update patching."""

from flymap.container import MapperBeanRegistry, mapper_bean, scan_package
from flymap.core import Config, MappingContext
from flymap.kernel.exceptions import (
    FieldAccessException,
    FlymapException,
    InvalidArgumentException,
    MappingException,
    ValidationException,
)
from flymap.mapping import (
    GenericMapper,
    IgnoreField,
    Mapper,
    MatchingStrategy,
    NullHandlingStrategy,
    Patcher,
    SetToNullStrategy,
    SkipNullStrategy,
    ignore_field,
)

__version__ = "0.1.0"

__all__ = [
    "Config",
    "FieldAccessException",
    "FlymapException",
    "GenericMapper",
    "IgnoreField",
    "InvalidArgumentException",
    "Mapper",
    "MapperBeanRegistry",
    "MappingContext",
    "MappingException",
    "MatchingStrategy",
    "NullHandlingStrategy",
    "Patcher",
    "SetToNullStrategy",
    "SkipNullStrategy",
    "ValidationException",
    "ignore_field",
    "mapper_bean",
    "scan_package",
]
