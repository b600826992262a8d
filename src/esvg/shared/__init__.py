"""Shared utilities for esvg.

Configuration objects, error types, diagnostics and logging used across the
tree, tokenization, page and shape layers.
"""

from .config import (
    ConfigError,
    ConfigValidationError,
    EsvgConfig,
    ParserConfig,
    SerializerConfig,
)
from .errors import (
    EsvgError,
    PageError,
    ParseError,
    TreeError,
)
from .logging import (
    CorrelationLogger,
    configure_logging,
    get_logger,
)
from .point import Point
from .result import (
    DiagnosticEntry,
    DiagnosticSeverity,
)

__all__ = [
    "ConfigError",
    "ConfigValidationError",
    "EsvgConfig",
    "ParserConfig",
    "SerializerConfig",
    "EsvgError",
    "PageError",
    "ParseError",
    "TreeError",
    "CorrelationLogger",
    "configure_logging",
    "get_logger",
    "Point",
    "DiagnosticEntry",
    "DiagnosticSeverity",
]
