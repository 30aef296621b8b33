"""
Version 1 of the Bug Tracker API, mounted under ``/api/v1``.
"""
