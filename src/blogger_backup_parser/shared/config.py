"""Configuration classes for Blogger backup decoding.

This module provides configuration objects for the classifier markers, the
path-based field routing, the lxml event stream and the content-saving
collaborator. Component configs validate themselves in ``__post_init__``;
``DecoderConfig`` aggregates them into one immutable object.
"""

import json
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

BLOGGER_KIND_BASE = "http://schemas.google.com/blogger/2008/kind#"

# Fields of the entry accumulator reachable through the routing table
ROUTABLE_FIELDS = ("author_name", "title", "content", "id", "published", "draft")


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass
class MarkerConfig:
    """Attribute values that identify the kind of an entry."""

    post_kind: str = BLOGGER_KIND_BASE + "post"
    comment_kind: str = BLOGGER_KIND_BASE + "comment"  # comments match on post_id_prefix
    settings_kind: str = BLOGGER_KIND_BASE + "settings"
    template_kind: str = BLOGGER_KIND_BASE + "template"
    post_id_prefix: str = "tag:blogger.com,1999:blog"

    def __post_init__(self) -> None:
        """Validate marker configuration."""
        exact = [self.post_kind, self.settings_kind, self.template_kind]
        if not all(exact) or not self.post_id_prefix:
            raise ValueError("kind markers and post_id_prefix cannot be empty")
        if len(set(exact)) != len(exact):
            raise ValueError("post, settings and template markers must be distinct")
        if any(marker.startswith(self.post_id_prefix) for marker in exact):
            raise ValueError("kind markers must not start with post_id_prefix")


@dataclass
class RoutingConfig:
    """Path layout used to route element text into entry fields."""

    separator: str = "=>"
    feed_element: str = "feed"
    entry_element: str = "entry"
    draft_value: str = "yes"
    routes: Dict[str, str] = field(default_factory=lambda: {
        "author=>name": "author_name",
        "title": "title",
        "content": "content",
        "id": "id",
        "published": "published",
        "app:control=>app:draft": "draft",
    })

    def __post_init__(self) -> None:
        """Validate routing configuration."""
        if not self.separator:
            raise ValueError("separator cannot be empty")
        if not self.feed_element or not self.entry_element:
            raise ValueError("feed_element and entry_element cannot be empty")
        unknown = set(self.routes.values()) - set(ROUTABLE_FIELDS)
        if unknown:
            raise ValueError(f"routes target unknown entry fields: {sorted(unknown)}")

    @property
    def entry_path(self) -> str:
        """Path string of an entry boundary, e.g. ``feed=>entry``."""
        return self.separator.join([self.feed_element, self.entry_element])

    def field_routes(self) -> Dict[str, str]:
        """Map full path strings to entry field names.

        Route keys are written with ``=>`` and re-joined with the configured
        separator.
        """
        return {
            self.separator.join(
                [self.feed_element, self.entry_element, *relative.split("=>")]
            ): field_name
            for relative, field_name in self.routes.items()
        }


@dataclass
class StreamConfig:
    """Options handed to the lxml event stream.

    The document encoding always comes from the XML declaration (UTF-8 when
    absent).
    """

    huge_tree: bool = True
    resolve_entities: bool = False

    def __post_init__(self) -> None:
        """Validate stream configuration."""
        for name in ("huge_tree", "resolve_entities"):
            if not isinstance(getattr(self, name), bool):
                raise ValueError(f"{name} must be a boolean")


@dataclass
class StorageConfig:
    """Configuration for saving post content to the filesystem."""

    content_root: str = "data/bookroot"
    filename_prefix: str = "post_content_for_"
    encoding: str = "utf-8"

    def __post_init__(self) -> None:
        """Validate storage configuration."""
        if not self.content_root:
            raise ValueError("content_root cannot be empty")
        if "/" in self.filename_prefix:
            raise ValueError("filename_prefix cannot contain a path separator")
        try:
            "".encode(self.encoding)
        except LookupError as e:
            raise ValueError(f"unknown encoding: {self.encoding}") from e


@dataclass(frozen=True)
class DecoderConfig:
    """Complete configuration for a decode call.

    Immutable; use ``override`` to derive variants.
    """

    markers: MarkerConfig = field(default_factory=MarkerConfig)
    routing: RoutingConfig = field(default_factory=RoutingConfig)
    stream: StreamConfig = field(default_factory=StreamConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)

    logging_level: str = "WARNING"
    name: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate the complete decoder configuration."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        try:
            self.markers.__post_init__()
            self.routing.__post_init__()
            self.stream.__post_init__()
            self.storage.__post_init__()
        except ValueError as e:
            raise ConfigValidationError(str(e)) from e
        if self.logging_level not in valid_levels:
            raise ConfigValidationError(
                f"logging_level must be one of {valid_levels}",
                field_name="logging_level",
            )

    def override(self, **kwargs: Any) -> "DecoderConfig":
        """Create a new configuration with specific overrides.

        Example:
            >>> config = DecoderConfig()
            >>> config.override(storage__content_root="out", logging_level="DEBUG")
        """
        nested: Dict[str, Dict[str, Any]] = {}
        top_level: Dict[str, Any] = {}
        for key, value in kwargs.items():
            if "__" in key:
                component, field_name = key.split("__", 1)
                nested.setdefault(component, {})[field_name] = value
            else:
                top_level[key] = value

        new_fields: Dict[str, Any] = dict(top_level)
        for component, overrides in nested.items():
            current = getattr(self, component, None)
            if current is None or not hasattr(current, "__dataclass_fields__"):
                raise ConfigValidationError(
                    f"Unknown configuration component: {component}",
                    field_name=component,
                )
            try:
                new_fields[component] = replace(current, **overrides)
            except (TypeError, ValueError) as e:
                raise ConfigValidationError(str(e), field_name=component) from e
        return replace(self, **new_fields)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        def _dataclass_to_dict(obj: Any) -> Any:
            if hasattr(obj, "__dataclass_fields__"):
                return {
                    name: _dataclass_to_dict(getattr(obj, name))
                    for name in obj.__dataclass_fields__
                }
            if isinstance(obj, dict):
                return {key: _dataclass_to_dict(value) for key, value in obj.items()}
            return obj

        return _dataclass_to_dict(self)

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DecoderConfig":
        """Create configuration from dictionary.

        Unknown keys are rejected so that typos in config files surface.
        """
        components = {
            "markers": MarkerConfig,
            "routing": RoutingConfig,
            "stream": StreamConfig,
            "storage": StorageConfig,
        }
        values: Dict[str, Any] = {}
        for key, value in data.items():
            if key in components:
                if not isinstance(value, dict):
                    raise ConfigValidationError(
                        f"{key} must be a mapping", field_name=key
                    )
                try:
                    values[key] = components[key](**value)
                except (TypeError, ValueError) as e:
                    raise ConfigValidationError(str(e), field_name=key) from e
            elif key in ("logging_level", "name"):
                values[key] = value
            else:
                raise ConfigValidationError(
                    f"Unknown configuration key: {key}",
                    field_name=key,
                    suggestions=sorted([*components, "logging_level", "name"]),
                )
        return cls(**values)

    @classmethod
    def from_json(cls, json_str: str) -> "DecoderConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid JSON configuration: {e}") from e
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration JSON must be an object")
        return cls.from_dict(data)

    @classmethod
    def from_file(cls, config_path: Union[str, Path]) -> "DecoderConfig":
        """Load configuration from a JSON file."""
        path = Path(config_path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Could not read config file {path}: {e}") from e
        return cls.from_json(text)
