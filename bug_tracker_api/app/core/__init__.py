"""
Cross‑cutting infrastructure: configuration, logging, database access,
security and HTTP error/header helpers.
"""
