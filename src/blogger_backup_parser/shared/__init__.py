"""Shared utilities for Blogger backup decoding.

This module provides configuration objects, result and diagnostic types, the
exception hierarchy and logging helpers used across all layers.
"""

from .config import (
    ConfigError,
    ConfigValidationError,
    DecoderConfig,
    MarkerConfig,
    RoutingConfig,
    StorageConfig,
    StreamConfig,
)
from .errors import (
    BackupEncodingError,
    BackupError,
    BackupReadError,
    BackupStructureError,
    EntryConversionError,
    TimestampParseError,
)
from .logging import (
    CorrelationLogger,
    get_logger,
    set_package_level,
)
from .result import (
    DecodeMetrics,
    DiagnosticEntry,
    DiagnosticSeverity,
)

__all__ = [
    "ConfigError",
    "ConfigValidationError",
    "DecoderConfig",
    "MarkerConfig",
    "RoutingConfig",
    "StorageConfig",
    "StreamConfig",
    "BackupEncodingError",
    "BackupError",
    "BackupReadError",
    "BackupStructureError",
    "EntryConversionError",
    "TimestampParseError",
    "CorrelationLogger",
    "get_logger",
    "set_package_level",
    "DecodeMetrics",
    "DiagnosticEntry",
    "DiagnosticSeverity",
]
