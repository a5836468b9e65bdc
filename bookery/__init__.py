"""Bookery desktop client: module navigation and catalog search."""

__version__ = "0.1.0"
