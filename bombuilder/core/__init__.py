"""Core aggregation logic for BOM generation."""

__all__ = [
    "attacher",
    "bom_model",
    "config",
    "coordinates",
    "errors",
    "matchers",
    "module_graph",
    "scope",
    "version_properties",
    "writer",
]
