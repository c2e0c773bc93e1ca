"""MongoDB connection helpers bound to application settings."""

from app.config import settings
from app.infra.mongo import get_database as _get_database, yield_database


def get_database():
    """Return a MongoDB database handle (non-dependency use)."""
    return _get_database(settings.MONGODB_URI, settings.MONGODB_DB_NAME)


def get_db():
    """FastAPI dependency that yields a database handle."""
    yield from yield_database(settings.MONGODB_URI, settings.MONGODB_DB_NAME)
