"""
Application package initializer.

This package contains the FastAPI entrypoint and its submodules:
``core`` for configuration, logging and database access, ``schemas``
for the Pydantic models, ``services`` for the customer store and
``api`` for the HTTP routes.
"""

from .main import app  # noqa: F401
