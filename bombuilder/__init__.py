"""Generate dependency-management BOMs from a module graph snapshot."""

__version__ = "0.1.0"
