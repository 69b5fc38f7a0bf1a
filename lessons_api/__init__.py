"""FastAPI service demonstrating routing, validation, dependency injection,
file uploads, background tasks and custom exception handling over an
in-memory item store.
"""

__version__ = "1.0.0"
