"""Exception types raised by docindex.

Only failures that must stop a run are raised. Per-document problems are
logged and degraded to defaults instead.
"""
from __future__ import annotations


class DocIndexError(Exception):
    """Base error for index generation failures."""
    pass


class DiscoveryError(DocIndexError):
    """Raised when the content root cannot be scanned."""
    pass


class ConfigError(DocIndexError, ValueError):
    """Raised when the index config file is malformed or fails validation."""
    pass


class DateResolutionError(DocIndexError):
    """Raised in strict mode when a document date has no git history."""
    pass
