"""Infrastructure helpers (MongoDB client cache)."""

from .mongo import get_client, get_database, yield_database

__all__ = ["get_client", "get_database", "yield_database"]
