"""Exception hierarchy for mdmapper.

Planning is a pure computation, so every error here is deterministic: the same
project and configuration reproduce it on every run.
"""

from __future__ import annotations

from typing import Any


class MdMapperError(Exception):
    """Base exception for all mdmapper errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ConfigurationError(MdMapperError):
    """Fatal planning error raised before any document is written.

    Covers unrecognised flavor values and two documents mapped to the same
    output path.
    """


class ProjectLoadError(MdMapperError):
    """The analyzer hand-off could not be read or failed validation."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Failed to load project from {path}: {reason}", {"path": path})
        self.path = path
        self.reason = reason


__all__ = ["MdMapperError", "ConfigurationError", "ProjectLoadError"]
