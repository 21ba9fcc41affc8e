"""Supabase client for the API server.

One service-role client per process, created on first use. The service
role bypasses row-level security, so every store scopes its queries to
the authenticated user id itself.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from supabase import Client, create_client

from fitbot.errors import PersistenceError
from fitbot.keys import supabase_credentials

logger = logging.getLogger(__name__)

_supabase: Client | None = None


def get_client() -> Client:
    """Lazy-init the Supabase service-role client."""
    global _supabase
    if _supabase is None:
        url, key = supabase_credentials(service=True)
        _supabase = create_client(url, key)
    return _supabase


def reset_client() -> None:
    """Forget the cached client (next get_client() builds a new one)."""
    global _supabase
    _supabase = None


@contextmanager
def translate_errors(action: str) -> Iterator[None]:
    """Re-raise any client failure as PersistenceError."""
    try:
        yield
    except PersistenceError:
        raise
    except Exception as e:
        logger.warning("Supabase call failed while trying to %s: %s", action, e)
        raise PersistenceError(f"Failed to {action}") from e
