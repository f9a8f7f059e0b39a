"""Layered configuration with dotted key access"""

import copy
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

import yaml

from ..api.exceptions import ConfigError

Key = Union[str, Sequence[str]]


def split_key(key: Key) -> List[str]:
    """Split a dotted key into its segments

    Tuples and lists are taken as already split, so segments that contain
    dots (connection handles, hosts) can still be addressed.
    """
    if isinstance(key, str):
        return [segment for segment in key.split('.') if segment != '']
    return [str(segment) for segment in key]


def replace_recursive(base: Any, *overrides: Any) -> Any:
    """Merge overrides into base, later values winning field by field

    Dicts merge by key and lists merge by index; any other value simply
    replaces the one below it.

    Examples:
        >>> replace_recursive({'a': 1, 'b': 1}, {'b': 2, 'c': 2}, {'c': 3})
        {'a': 1, 'b': 2, 'c': 3}
    """
    merged = copy.deepcopy(base)
    for override in overrides:
        merged = _merge(merged, override)
    return merged


def _merge(base: Any, override: Any) -> Any:
    if isinstance(base, dict) and isinstance(override, dict):
        merged = dict(base)
        for key, value in override.items():
            merged[key] = _merge(base[key], value) if key in base else copy.deepcopy(value)
        return merged

    if isinstance(base, list) and isinstance(override, list):
        merged = list(base)
        for index, value in enumerate(override):
            if index < len(merged):
                merged[index] = _merge(merged[index], value)
            else:
                merged.append(copy.deepcopy(value))
        return merged

    return copy.deepcopy(override)


class Config:
    """Nested configuration values addressed with dotted keys"""

    def __init__(self, data: Optional[Dict[str, Any]] = None, path: Optional[Path] = None):
        """Initialize configuration

        Args:
            data: Initial configuration values
            path: File the values were loaded from, if any
        """
        self._data: Dict[str, Any] = data or {}
        self.path = path

    @classmethod
    def load(cls, path: Union[str, Path]) -> 'Config':
        """Load configuration from a YAML file

        Args:
            path: Path to the configuration file

        Returns:
            Loaded configuration

        Raises:
            ConfigError: If the file is missing or malformed
        """
        path = Path(path)
        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        with open(path, 'r') as f:
            content = f.read()

        # Simple environment variable expansion
        content = os.path.expandvars(content)

        try:
            data = yaml.safe_load(content) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid configuration file {path}: {e}")

        if not isinstance(data, dict):
            raise ConfigError(f"Configuration file {path} must contain a mapping")

        return cls(data, path=path)

    def get(self, key: Key, default: Any = None) -> Any:
        """Get a value by dotted key"""
        node: Any = self._data
        for segment in split_key(key):
            if isinstance(node, dict) and segment in node:
                node = node[segment]
            elif isinstance(node, list) and segment.isdigit() and int(segment) < len(node):
                node = node[int(segment)]
            else:
                return default
        return node

    def has(self, key: Key) -> bool:
        """Check whether a dotted key is set"""
        marker = object()
        return self.get(key, marker) is not marker

    def set(self, key: Key, value: Any) -> None:
        """Set a value by dotted key, creating intermediate mappings"""
        segments = split_key(key)
        if not segments:
            raise ConfigError("Cannot set an empty configuration key")

        node = self._data
        for segment in segments[:-1]:
            child = node.get(segment)
            if isinstance(child, list):
                child = {str(index): value for index, value in enumerate(child)}
                node[segment] = child
            elif not isinstance(child, dict):
                child = {}
                node[segment] = child
            node = child

        node[segments[-1]] = value

    def forget(self, key: Key) -> None:
        """Remove a dotted key if present"""
        segments = split_key(key)
        node: Any = self._data
        for segment in segments[:-1]:
            node = node.get(segment) if isinstance(node, dict) else None
            if node is None:
                return
        if isinstance(node, dict):
            node.pop(segments[-1], None)

    def to_dict(self) -> Dict[str, Any]:
        """Return a deep copy of all values"""
        return copy.deepcopy(self._data)
