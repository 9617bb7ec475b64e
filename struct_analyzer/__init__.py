"""Extract struct, field and tag metadata from Go repositories."""

__version__ = "0.1.0"
