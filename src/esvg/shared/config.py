"""Configuration classes for esvg.

Parser and serializer behavior is controlled by small validated dataclasses
aggregated into an immutable ``EsvgConfig``.
"""

import json
import logging
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, List, Optional

from esvg.shared.errors import EsvgError

_VALID_LOGGING_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_COMPONENTS = ("parser", "serializer")


class ConfigError(EsvgError):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class ParserConfig:
    """Configuration for markup parsing.

    Attributes:
        preserve_whitespace: Keep whitespace-only text runs as Text nodes
        keep_comments: Keep comments inside the root element as Comment nodes
        max_depth: Maximum number of simultaneously open elements. Building is
            iterative, but serialization, equality and ``Element.iter`` recurse
            once per level, so depths near the interpreter recursion limit
            (about 1000) raise ``RecursionError`` there.
    """

    preserve_whitespace: bool = True
    keep_comments: bool = True
    max_depth: int = 512

    def __post_init__(self) -> None:
        """Validate parser configuration."""
        if self.max_depth <= 0:
            raise ValueError("max_depth must be > 0")


@dataclass(frozen=True)
class SerializerConfig:
    """Configuration for pretty serialization.

    Attributes:
        indent: Indentation unit repeated once per depth level
        sort_attributes: Emit attributes sorted by name instead of insertion order
    """

    indent: str = "\t"
    sort_attributes: bool = True

    def __post_init__(self) -> None:
        """Validate serializer configuration."""
        if self.indent.strip():
            raise ValueError("indent must contain only whitespace")


@dataclass(frozen=True)
class EsvgConfig:
    """Complete configuration for parsing and serialization.

    Immutable, so one instance can be shared between documents.
    """

    parser: ParserConfig = field(default_factory=ParserConfig)
    serializer: SerializerConfig = field(default_factory=SerializerConfig)
    logging_level: str = "WARNING"

    def __post_init__(self) -> None:
        """Validate the complete configuration."""
        try:
            self.parser.__post_init__()
            self.serializer.__post_init__()
        except ValueError as e:
            raise ConfigValidationError(str(e)) from e

        if self.logging_level not in _VALID_LOGGING_LEVELS:
            raise ConfigValidationError(
                f"logging_level must be one of {_VALID_LOGGING_LEVELS}",
                field_name="logging_level",
                suggestions=list(_VALID_LOGGING_LEVELS),
            )

    @property
    def log_level(self) -> int:
        """Numeric logging level."""
        return int(getattr(logging, self.logging_level))

    def override(self, **kwargs: Any) -> "EsvgConfig":
        """Create a new configuration with specific overrides.

        Args:
            **kwargs: Fields to override; nested fields use ``component__field``

        Returns:
            New EsvgConfig instance with overrides applied

        Example:
            >>> config = EsvgConfig().override(parser__max_depth=64)
            >>> config.parser.max_depth
            64
        """
        nested_overrides: Dict[str, Dict[str, Any]] = {}
        top_level: Dict[str, Any] = {}
        for key, value in kwargs.items():
            if "__" in key:
                component, field_name = key.split("__", 1)
                if component not in _COMPONENTS:
                    raise ConfigValidationError(
                        f"Unknown configuration component: {component}",
                        field_name=key,
                        suggestions=list(_COMPONENTS),
                    )
                nested_overrides.setdefault(component, {})[field_name] = value
            else:
                top_level[key] = value

        try:
            for component, values in nested_overrides.items():
                top_level[component] = replace(getattr(self, component), **values)
            return replace(self, **top_level)
        except (TypeError, ValueError) as e:
            raise ConfigValidationError(str(e)) from e

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        def _dataclass_to_dict(obj: Any) -> Any:
            if hasattr(obj, "__dataclass_fields__"):
                return {f.name: _dataclass_to_dict(getattr(obj, f.name)) for f in fields(obj)}
            return obj

        result = _dataclass_to_dict(self)
        if not isinstance(result, dict):
            raise ConfigValidationError("Configuration serialization failed")
        return result

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EsvgConfig":
        """Create configuration from dictionary.

        Unknown keys are rejected so typos in configuration files surface early.
        """
        def _dict_to_dataclass(data_dict: Dict[str, Any], target_class: type) -> Any:
            known = {f.name: f for f in fields(target_class)}
            unknown = set(data_dict) - set(known)
            if unknown:
                raise ConfigValidationError(
                    f"Unknown configuration keys for {target_class.__name__}: "
                    f"{sorted(unknown)}"
                )
            field_values: Dict[str, Any] = {}
            for name, value in data_dict.items():
                field_type = known[name].type
                if hasattr(field_type, "__dataclass_fields__") and isinstance(value, dict):
                    field_values[name] = _dict_to_dataclass(value, field_type)
                else:
                    field_values[name] = value
            try:
                return target_class(**field_values)
            except ValueError as e:
                raise ConfigValidationError(str(e)) from e

        return _dict_to_dataclass(data, cls)

    @classmethod
    def from_json(cls, json_str: str) -> "EsvgConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid configuration JSON: {e}") from e
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration JSON must be an object")
        return cls.from_dict(data)

    @classmethod
    def default(cls) -> "EsvgConfig":
        """Lossless parsing and tab-indented sorted output."""
        return cls()

    @classmethod
    def strict(cls) -> "EsvgConfig":
        """Shallow nesting limit for untrusted input."""
        return cls(parser=ParserConfig(max_depth=64))

    @classmethod
    def compact_output(cls) -> "EsvgConfig":
        """Drop layout whitespace and comments when reading files."""
        return cls(parser=ParserConfig(preserve_whitespace=False, keep_comments=False))
