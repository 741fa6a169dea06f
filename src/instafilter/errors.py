"""Exception hierarchy shared by the Instafilter modules."""

from __future__ import annotations


class InstafilterError(Exception):
    """Base class for all errors raised by the package."""


class UnknownFilterError(InstafilterError, ValueError):
    """Raised when a filter identifier does not name a catalog entry."""


class SettingsInvalidError(InstafilterError):
    """Raised when the settings file exists but cannot be decoded."""


class ImageLoadError(InstafilterError):
    """Raised when an input bitmap cannot be read from disk."""


class ExportError(InstafilterError):
    """Raised when a rendered bitmap cannot be written to its destination."""
