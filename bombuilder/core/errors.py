"""Exceptions raised while building a BOM."""

from __future__ import annotations


class BomBuilderError(Exception):
    """Base class for all errors raised by the package."""


class ConfigurationError(BomBuilderError, ValueError):
    """Invalid configuration or input document; raised before any output is written."""


class ManifestWriteError(BomBuilderError, OSError):
    """The generated document could not be persisted."""
