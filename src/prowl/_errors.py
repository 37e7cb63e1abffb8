"""Prowl error hierarchy.

All prowl-specific errors inherit from ProwlError for easy catching.
"""


class ProwlError(Exception):
    """Base error for all prowl operations."""


class ConfigError(ProwlError):
    """Invalid or missing configuration."""


class RouteError(ProwlError):
    """A dynamic route cannot be turned into a matchable URL pattern."""


class DataSourceError(ProwlError):
    """A dynamic route's data source did not produce a collection."""


class RenderError(ProwlError):
    """The renderer failed to produce content for a template."""


class ExportError(ProwlError):
    """Error during static generation or artifact emission."""


class PathError(ExportError):
    """An output path would land outside the output directory."""
