"""Database driver adapters.

Each adapter package imports its driver library, so import them by path (or
through :func:`sqlsparrow.config.resolve_driver_type`) only when needed.
"""
