"""
Pydantic schema definitions for API payloads.

Each entity has a ``Write`` model (body of ``POST`` and ``PUT``), a
``Patch`` model (body of ``PATCH``; every field optional, only the
fields actually sent are applied) and a ``Read`` model for responses.
Relationships are written as references (``{"id": "..."}``) and read
back as nested summaries.
"""
