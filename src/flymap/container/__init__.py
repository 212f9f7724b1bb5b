"""flymap Container — mapper-bean registration and package scanning."""

from flymap.container.registry import MapperBeanRegistry, Registration
from flymap.container.scanner import scan_package
from flymap.container.stereotypes import is_mapper_bean, mapper_bean

__all__ = [
    "MapperBeanRegistry",
    "Registration",
    "is_mapper_bean",
    "mapper_bean",
    "scan_package",
]
