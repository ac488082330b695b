"""A JSON HTTP service, backed by SQLite, for recording income and expenses."""

__version__ = "1.0.0"