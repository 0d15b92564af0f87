"""Task management API for caseworkers."""

__version__ = "1.0.0"
