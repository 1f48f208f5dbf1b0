"""Hugo Link Checker: link extraction, resolution and validation for Hugo sites."""

__version__ = "0.3.0"
