"""
Application package initializer.

This package contains the main entrypoint for the API and all of its
submodules.  Configuration, logging, error handling and the SQLite
bootstrap live in ``core``; validation, conflict detection and the
record stores live in ``services``; the HTTP routes are defined in
``api/v1/endpoints``.
"""

from .main import app  # noqa: F401
