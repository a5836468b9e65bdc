"""Adapter package for external I/O implementations.

Purpose:
    Collect concrete implementations for domain ports: the library REST
    catalog, the in-process command bridge, local settings storage, and the
    offline catalog used when no API URL is configured.

Dependencies:
    ``requests`` (REST catalog), ``jinja2`` (command bridge markup), and the
    filesystem (settings).

Call context:
    Imported by ``bookery.app.controller`` for runtime wiring and by tests.
"""
