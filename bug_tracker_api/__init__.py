"""
Top‑level package for the Bug Tracker API.

This file makes ``bug_tracker_api`` a Python package so that modules
within ``app`` can be imported using fully qualified names like
``bug_tracker_api.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
