"""
Application package initializer.

This package contains the main entrypoint for the API and all of its
submodules.  Each domain (projects, tickets, labels, users) has its
own schemas, repository, service and router under ``api/v1/endpoints``.
The entity model with its relationship and merge logic lives in
``domain`` and is independent of FastAPI.
"""

from .main import app  # noqa: F401
