"""Catalog browsing and stream resolution for embedded-props streaming sites."""

__version__ = "0.1.0"
