"""Shared MongoDB helpers."""

from __future__ import annotations

from typing import Any, Dict, Tuple

from pymongo import MongoClient

_clients: Dict[Tuple[str, frozenset], MongoClient] = {}


def get_client(uri: str, **kwargs: Any) -> MongoClient:
    """
    Return a cached MongoClient keyed by URI and options.
    PyMongo pools connections per client, so one client per URI is enough.
    """
    key = (uri, frozenset(kwargs.items()))
    if key not in _clients:
        _clients[key] = MongoClient(uri, **kwargs)
    return _clients[key]


def get_database(uri: str, db_name: str, **kwargs: Any):
    """Convenience helper to fetch a database handle."""
    client = get_client(uri, **kwargs)
    return client[db_name]


def yield_database(uri: str, db_name: str, **kwargs: Any):
    """
    Dependency helper for FastAPI to yield a database.
    Clients are cached, so nothing is closed when the request ends.
    """
    yield get_database(uri, db_name, **kwargs)
