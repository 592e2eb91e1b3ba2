"""
Smaak - Supabase Client.

Only used when the catalog source is "supabase" or when seeding the
ingredient tables. All queries go through here.
"""

import logging

from supabase import Client, create_client

from smaak.config import settings

logger = logging.getLogger(__name__)

# Singleton client instance
_client: Client | None = None


def get_client() -> Client:
    """
    Get the Supabase client.

    Uses singleton pattern to reuse connection.

    Raises:
        RuntimeError: If SUPABASE_URL or SUPABASE_ANON_KEY is not configured
    """
    global _client

    if _client is None:
        if not settings.supabase_url or not settings.supabase_anon_key:
            raise RuntimeError("SUPABASE_URL and SUPABASE_ANON_KEY must be set for the supabase catalog")
        _client = create_client(
            settings.supabase_url,
            settings.supabase_anon_key,
        )
        logger.debug(f"Connected to Supabase at {settings.supabase_url}")

    return _client


# =============================================================================
# Catalog Writes
# =============================================================================


def upsert_rows(table: str, rows: list[dict], batch_size: int = 100) -> int:
    """
    Upsert rows into a table in batches.

    Returns:
        Number of rows written
    """
    client = get_client()
    written = 0
    for start in range(0, len(rows), batch_size):
        batch = rows[start:start + batch_size]
        response = client.table(table).upsert(batch).execute()
        written += len(response.data or [])
    return written
