"""flymap Logging — logging port and structlog adapter."""

from flymap.logging.port import LoggingPort
from flymap.logging.structlog_adapter import StructlogAdapter

__all__ = ["LoggingPort", "StructlogAdapter"]
