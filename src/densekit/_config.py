"""
densekit Config - Runtime Configuration

Dataclass sections held by a single manager. Values can be changed globally
or overridden for the current thread inside a ``config.local(...)`` block.

Environment variables read at import time:
    DENSEKIT_BOUNDS_CHECK   '1'/'true'/'yes' enables index validation
    DENSEKIT_MAX_ROWS       rows shown by ``repr(matrix)``
"""

from __future__ import annotations

import os
import threading
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple


def _env_flag(name: str) -> bool:
    return os.environ.get(name, '').lower() in ('1', 'true', 'yes')


def _env_int(name: str, default: int) -> int:
    value = os.environ.get(name, '')
    if not value:
        return default
    try:
        return int(value)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {value!r}") from e


# =============================================================================
# Configuration Classes
# =============================================================================

@dataclass
class IndexingConfig:
    """Configuration for element and row/column access."""
    bounds_check: bool = False     # Raise IndexError instead of reading past a row


@dataclass
class DisplayConfig:
    """Configuration for text rendering of matrices."""
    max_rows: int = 20             # Rows shown by repr() before eliding


# =============================================================================
# Global Configuration Manager
# =============================================================================

class DenseKitConfig:
    """
    Global configuration manager for densekit.

    Example:
        # Global configuration
        densekit.config.indexing.bounds_check = True

        # Local configuration (context manager)
        with densekit.config.local(indexing=IndexingConfig(bounds_check=True)):
            mat.item(5, 0)   # raises IndexError on a 2-row matrix
    """

    _SECTIONS = ("indexing", "display")

    def __init__(self):
        self._global_indexing, self._global_display = self._defaults()

        # Thread-local storage for context overrides
        self._local = threading.local()

    # -------------------------------------------------------------------------
    # Property Accessors (with thread-local override support)
    # -------------------------------------------------------------------------

    @property
    def indexing(self) -> IndexingConfig:
        """Get indexing configuration."""
        local = getattr(self._local, "indexing", None)
        if local is not None:
            return local
        return self._global_indexing

    @indexing.setter
    def indexing(self, value: IndexingConfig):
        self._global_indexing = value

    @property
    def display(self) -> DisplayConfig:
        """Get display configuration."""
        local = getattr(self._local, "display", None)
        if local is not None:
            return local
        return self._global_display

    @display.setter
    def display(self, value: DisplayConfig):
        self._global_display = value

    # -------------------------------------------------------------------------
    # Convenience Properties
    # -------------------------------------------------------------------------

    @property
    def bounds_check(self) -> bool:
        """Whether index validation is enabled."""
        return self.indexing.bounds_check

    @bounds_check.setter
    def bounds_check(self, value: bool):
        self._global_indexing.bounds_check = value

    # -------------------------------------------------------------------------
    # Context Manager Support
    # -------------------------------------------------------------------------

    def local(self, **kwargs) -> "_LocalConfigContext":
        """
        Create a local configuration context.

        Args:
            **kwargs: Section overrides (indexing, display)

        Returns:
            Context manager
        """
        unknown = set(kwargs) - set(self._SECTIONS)
        if unknown:
            raise TypeError(f"Unknown config sections: {sorted(unknown)}")
        return _LocalConfigContext(self, **kwargs)

    def _set_local(self, **kwargs) -> Dict[str, Any]:
        previous = {}
        for key, value in kwargs.items():
            previous[key] = getattr(self._local, key, None)
            setattr(self._local, key, value)
        return previous

    def _restore_local(self, previous: Dict[str, Any]):
        for key, value in previous.items():
            setattr(self._local, key, value)

    # -------------------------------------------------------------------------
    # Reset / Serialization
    # -------------------------------------------------------------------------

    @staticmethod
    def _defaults() -> Tuple[IndexingConfig, DisplayConfig]:
        """Default sections, honouring the environment variables."""
        return (
            IndexingConfig(bounds_check=_env_flag('DENSEKIT_BOUNDS_CHECK')),
            DisplayConfig(max_rows=_env_int('DENSEKIT_MAX_ROWS', 20)),
        )

    def reset(self):
        """Reset all configurations to their environment defaults."""
        self._global_indexing, self._global_display = self._defaults()

    def to_dict(self) -> Dict[str, Any]:
        """Export configuration as dictionary."""
        return {
            "indexing": {
                "bounds_check": self.indexing.bounds_check,
            },
            "display": {
                "max_rows": self.display.max_rows,
            },
        }

    def __repr__(self) -> str:
        return f"DenseKitConfig({self.to_dict()})"


class _LocalConfigContext:
    """Context manager for local configuration override."""

    def __init__(self, config: DenseKitConfig, **kwargs):
        self._config = config
        self._kwargs = kwargs
        self._previous: List[Dict[str, Any]] = []

    def __enter__(self):
        self._previous.append(self._config._set_local(**self._kwargs))
        return self._config

    def __exit__(self, exc_type, exc_val, exc_tb):
        self._config._restore_local(self._previous.pop())
        return False


# =============================================================================
# Global Instance
# =============================================================================

config = DenseKitConfig()


def get_config() -> DenseKitConfig:
    """Get the global configuration instance."""
    return config


def set_bounds_check(enabled: bool = True):
    """Enable or disable index validation globally."""
    config.bounds_check = enabled


__all__ = [
    "IndexingConfig",
    "DisplayConfig",
    "DenseKitConfig",
    "config",
    "get_config",
    "set_bounds_check",
]
