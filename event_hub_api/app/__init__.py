"""
Application package initializer.

This package contains the main entrypoint for the API and its
submodules: ``core`` (configuration, logging, database, security,
errors), ``services`` (data access per entity), ``schemas`` (wire
models) and ``api`` (versioned routers).
"""

from .main import app, create_app  # noqa: F401
