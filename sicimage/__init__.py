"""Image loading, output format selection, conversion and operation-argument parsing."""

__version__ = "0.20.0"

__all__ = [
    "conversion",
    "errors",
    "format",
    "images",
    "importing",
    "named_value",
    "value_parser",
]