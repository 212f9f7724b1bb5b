"""flymap Core — configuration and context bootstrap."""

from flymap.core.config import Config, config_properties
from flymap.core.context import MappingContext
from flymap.core.properties import MapperProperties

__all__ = ["Config", "MapperProperties", "MappingContext", "config_properties"]
