"""
Supabase client initialization.

This module contains *only* the database connection setup. The client is
built from the application Settings and handed to the repository classes, so
importing this module has no side effects.

Settings required:
- SUPABASE_URL: Your Supabase project URL
- SUPABASE_KEY: Your Supabase API key (use a server-side key only on the backend)
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional

# The dependency is `supabase` (supabase-py). If your editor can't resolve it,
# install it in your environment: `pip install supabase`.
from supabase import Client, ClientOptions, create_client  # type: ignore[import-not-found]

from config import Settings


def create_supabase_client(settings: Settings) -> Client:
    """Create the Supabase client, failing fast on missing credentials."""

    if not settings.supabase_url:
        raise RuntimeError(
            "Missing environment variable: SUPABASE_URL. "
            "Set SUPABASE_URL to your Supabase project URL."
        )

    if not settings.supabase_key:
        raise RuntimeError(
            "Missing environment variable: SUPABASE_KEY. "
            "Set SUPABASE_KEY to your Supabase API key."
        )

    # PostgREST requests never outlive the per-request deadline.
    options = ClientOptions(postgrest_client_timeout=settings.request_timeout_seconds)
    return create_client(settings.supabase_url, settings.supabase_key, options=options)


def response_rows(response: Any, action: str) -> List[Mapping[str, Any]]:
    """
    Return the rows of a PostgREST response, raising on an error payload.

    action is used in the error message ("fetch offer", "create checkout"...).
    """

    error = getattr(response, "error", None)
    if error:
        raise RuntimeError(f"Failed to {action}: {error}")
    return getattr(response, "data", None) or []


def fetch_one(client: Client, table: str, column: str, value: Any, action: str) -> Optional[Mapping[str, Any]]:
    """Select a single row where column == value, or None."""

    response = (
        client.table(table)
        .select("*")
        .eq(column, value)
        .limit(1)
        .execute()
    )
    rows = response_rows(response, action)
    if not rows:
        return None
    return rows[0]


__all__ = ["create_supabase_client", "response_rows", "fetch_one"]
