# File: xchedule/core/config_source.py
"""
Hierarchical key/value document reader backing an event.

A ConfigSource wraps one parsed YAML, JSON or TOML document (or a nested
map materialized from one) and exposes typed lookups. Keys are
case-insensitive and dotted keys (``alerts.time``) address nested maps.
"""

import copy
import datetime
import json
import tomllib
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from xchedule.core.config_manager import Config
from xchedule.exceptions import ConfigIOError, ParseError, ValidationError


def _normalize_keys(value: Any) -> Any:
    """Lower-case mapping keys recursively."""
    if isinstance(value, dict):
        return {str(k).lower(): _normalize_keys(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_normalize_keys(v) for v in value]
    return value


def _to_string(value: Any) -> str:
    """Render a scalar document value as text."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    # YAML and TOML turn some timestamps into native objects
    if isinstance(value, datetime.datetime):
        if value.second or value.microsecond:
            return value.strftime("%Y-%m-%d %H:%M:%S")
        return value.strftime("%Y-%m-%d %H:%M")
    if isinstance(value, datetime.date):
        return value.strftime("%Y-%m-%d")
    if isinstance(value, datetime.time):
        return value.strftime("%H:%M:%S")
    if isinstance(value, (dict, list)):
        return ""
    return str(value)


def _to_string_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, list):
        return [_to_string(v) for v in value]
    if isinstance(value, dict):
        return []
    return [_to_string(value)]


class ConfigSource:
    """Typed read access over one configuration document."""

    def __init__(
        self,
        config_type: str,
        data: Optional[Dict[str, Any]] = None,
        name: str = "<memory>",
        path: Optional[Path] = None,
    ):
        """
        Initialize a config source.

        Args:
            config_type: Declared format ('yaml', 'yml', 'json' or 'toml')
            data: Already parsed document (keys are normalized)
            name: Label used in log and error messages
            path: File the document is read from, if any
        """
        config_type = config_type.lower().lstrip(".")
        if not Config.is_supported_type(config_type):
            raise ParseError(
                f"Unsupported config type '{config_type}', "
                f"expected one of {', '.join(Config.SUPPORTED_CONFIG_TYPES)}"
            )
        self.config_type = config_type
        self.name = name
        self.path = path
        self._data: Dict[str, Any] = _normalize_keys(data or {})

    # ==================== Construction ====================

    @classmethod
    def from_buffer(cls, buffer: Union[str, bytes], config_type: str, name: str = "<buffer>") -> 'ConfigSource':
        """Parse an in-memory document of the declared format."""
        source = cls(config_type, name=name)
        source._data = _normalize_keys(source._decode(buffer))
        return source

    @classmethod
    def from_file(cls, path: Union[str, Path], config_type: Optional[str] = None) -> 'ConfigSource':
        """Load and parse a whole file; the format defaults to its extension."""
        path = Path(path)
        if config_type is None:
            config_type = path.suffix
        source = cls(config_type, name=str(path), path=path)
        source.read_in_config()
        return source

    @classmethod
    def from_mapping(cls, mapping: Dict[str, Any], config_type: str, name: str = "<memory>") -> 'ConfigSource':
        """Build a source by assigning each key of an existing map."""
        source = cls(config_type, name=name)
        for key, value in mapping.items():
            source.set(key, copy.deepcopy(value))
        return source

    def read_in_config(self) -> None:
        """(Re)load the document from ``self.path``."""
        if self.path is None:
            raise ConfigIOError(f"No config file set for {self.name}")
        try:
            raw = self.path.read_bytes()
        except OSError as e:
            raise ConfigIOError(f"Fail to read event config {self.path}: {e}") from e
        self._data = _normalize_keys(self._decode(raw))

    def _decode(self, buffer: Union[str, bytes]) -> Dict[str, Any]:
        if isinstance(buffer, bytes):
            try:
                buffer = buffer.decode("utf-8")
            except UnicodeDecodeError as e:
                raise ParseError(f"{self.name} is not valid UTF-8: {e}") from e

        try:
            if self.config_type in ("yaml", "yml"):
                data = yaml.safe_load(buffer)
            elif self.config_type == "json":
                data = json.loads(buffer) if buffer.strip() else None
            else:
                data = tomllib.loads(buffer)
        except (yaml.YAMLError, json.JSONDecodeError, tomllib.TOMLDecodeError) as e:
            raise ParseError(f"Invalid {self.config_type} document in {self.name}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ParseError(
                f"Top level of {self.name} must be a mapping, got {type(data).__name__}"
            )
        return data

    # ==================== Lookups ====================

    def _lookup(self, key: str) -> Any:
        node: Any = self._data
        for part in key.lower().split("."):
            if not isinstance(node, dict) or part not in node:
                return None
            node = node[part]
        return node

    def get_string(self, key: str) -> str:
        """Get a value as text; missing keys give ''."""
        return _to_string(self._lookup(key))

    def get_string_list(self, key: str) -> List[str]:
        """Get a value as a list of text; a lone scalar becomes one item."""
        return _to_string_list(self._lookup(key))

    def get_string_map_string_list(self, key: str) -> Dict[str, List[str]]:
        """Get a map whose values are lists of text."""
        value = self._lookup(key)
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise ValidationError(
                f"'{key}' in {self.name} must be a mapping, got {type(value).__name__}"
            )
        return {k: _to_string_list(v) for k, v in value.items()}

    def get_map(self, key: str) -> Dict[str, Any]:
        """Get a nested map; anything else gives an empty dict."""
        value = self._lookup(key)
        if isinstance(value, dict):
            return copy.deepcopy(value)
        return {}

    def set(self, key: str, value: Any) -> None:
        """Assign a value, creating intermediate maps for dotted keys."""
        parts = key.lower().split(".")
        node = self._data
        for part in parts[:-1]:
            child = node.get(part)
            if not isinstance(child, dict):
                child = {}
                node[part] = child
            node = child
        node[parts[-1]] = _normalize_keys(value)

    def to_dict(self) -> Dict[str, Any]:
        """Copy of the whole document."""
        return copy.deepcopy(self._data)

    def __repr__(self) -> str:
        return f"ConfigSource(name={self.name!r}, config_type={self.config_type!r})"
