"""Custom exception hierarchy for clipflap."""

from __future__ import annotations


class ClipFlapError(Exception):
    """Base class for all custom errors raised by clipflap."""


# --- 3-layer hierarchy ---

class DomainError(ClipFlapError):
    """Base class for domain-level errors."""


class InfrastructureError(ClipFlapError):
    """Base class for infrastructure-level errors."""


class ApplicationError(ClipFlapError):
    """Base class for application-level errors."""


# --- Domain errors ---

class ImageNotLoadedError(DomainError):
    """Raised when an export is requested before an image and clip exist."""


# --- Infrastructure errors ---

class InvalidImageError(InfrastructureError):
    """Raised when an image payload or file cannot be decoded."""


class ExportError(InfrastructureError):
    """Raised when the clipped image cannot be rendered or encoded."""


# --- Settings errors ---

class SettingsError(ClipFlapError):
    """Base class for option related failures."""


class SettingsValidationError(SettingsError):
    """Raised when widget options fail schema validation."""
